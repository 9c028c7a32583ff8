"""Static capability matrix describing what each harness can hold.

The matrix is immutable data built once at import time. Orchestration code
consults it before every transform attempt; transformers only ever see kinds
the target supports.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from .config import Harness, NamingRule, ResourceKind

MATRIX_VERSION = "1"


@dataclass(frozen=True, slots=True)
class CapabilityDescriptor:
    """What one harness supports and how it constrains names."""

    harness: Harness
    kinds: frozenset[ResourceKind]
    naming: Mapping[ResourceKind, NamingRule] = field(default_factory=dict)
    model_selection: bool = True
    agent_metadata: frozenset[str] = frozenset()

    def supports(self, kind: ResourceKind) -> bool:
        return kind in self.kinds

    def naming_rule(self, kind: ResourceKind) -> NamingRule:
        return self.naming.get(kind, NamingRule.FREE)


def _descriptor(
    harness: Harness,
    kinds: set[ResourceKind],
    naming: dict[ResourceKind, NamingRule] | None = None,
    *,
    model_selection: bool = True,
    agent_metadata: frozenset[str] = frozenset(),
) -> CapabilityDescriptor:
    return CapabilityDescriptor(
        harness=harness,
        kinds=frozenset(kinds | {ResourceKind.SETTINGS}),
        naming=MappingProxyType(dict(naming or {})),
        model_selection=model_selection,
        agent_metadata=agent_metadata,
    )


_LH = NamingRule.LOWERCASE_HYPHENATED

CAPABILITY_MATRIX: Mapping[Harness, CapabilityDescriptor] = MappingProxyType(
    {
        Harness.CLAUDE_CODE: _descriptor(
            Harness.CLAUDE_CODE,
            {ResourceKind.MCP, ResourceKind.SKILLS, ResourceKind.AGENTS, ResourceKind.COMMANDS},
            agent_metadata=frozenset({"color"}),
        ),
        Harness.OPENCODE: _descriptor(
            Harness.OPENCODE,
            {ResourceKind.MCP, ResourceKind.SKILLS, ResourceKind.AGENTS, ResourceKind.COMMANDS},
            {ResourceKind.SKILLS: _LH, ResourceKind.AGENTS: _LH},
        ),
        Harness.GOOSE: _descriptor(
            Harness.GOOSE,
            {ResourceKind.MCP, ResourceKind.SKILLS},
            {ResourceKind.SKILLS: _LH},
        ),
        Harness.AMP_CODE: _descriptor(
            Harness.AMP_CODE,
            {ResourceKind.MCP, ResourceKind.SKILLS, ResourceKind.COMMANDS},
            {ResourceKind.SKILLS: _LH},
            model_selection=False,
        ),
    }
)


def descriptor_for(harness: Harness | str) -> CapabilityDescriptor:
    """Return the capability descriptor for a harness."""
    try:
        return CAPABILITY_MATRIX[Harness(harness)]
    except (KeyError, ValueError):
        supported = ", ".join(h.value for h in CAPABILITY_MATRIX)
        raise ValueError(f"Unknown harness '{harness}'. Supported: {supported}") from None


def supports(harness: Harness | str, kind: ResourceKind | str) -> bool:
    """Whether ``harness`` can hold resources of ``kind``."""
    return descriptor_for(harness).supports(ResourceKind(kind))


def naming_rule(harness: Harness | str, kind: ResourceKind | str) -> NamingRule:
    """Naming constraint ``harness`` applies to resources of ``kind``."""
    return descriptor_for(harness).naming_rule(ResourceKind(kind))

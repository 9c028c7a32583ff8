"""Per-kind transform strategies.

Each strategy takes a canonical resource and the target's capability
descriptor and returns an outcome plus the resource to stage. Strategies never
raise for a single resource; problems degrade to Skipped or Warned outcomes.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from ..harness.capabilities import CapabilityDescriptor
from ..harness.config import Harness, NamingRule, ResourceKind
from ..harness.tools import remap_tool
from ..markdown import rewrite_frontmatter_name
from ..schemas.profile import (
    CanonicalAgent,
    CanonicalCommand,
    CanonicalMcpServer,
    CanonicalSkill,
)
from ..schemas.report import TransformOutcome
from .naming import NameAllocator, is_valid_name, sanitize_name

SANITIZED_NOTE = "renamed to satisfy lowercase-hyphenated naming"
UNMAPPED_TOOL = "tool '{tool}' not recognized by target, passed through"


@dataclass(slots=True)
class TransformContext:
    """Per-run state shared by the strategies."""

    source: Harness
    target: CapabilityDescriptor
    no_transform: bool = False
    allocators: dict[ResourceKind, NameAllocator] = field(default_factory=dict)

    def allocator(self, kind: ResourceKind) -> NameAllocator:
        return self.allocators.setdefault(kind, NameAllocator())


@dataclass(frozen=True, slots=True)
class TransformResult:
    """Outcome of one strategy call and what to stage, if anything."""

    outcome: TransformOutcome
    resource: Any | None = None


@dataclass(frozen=True, slots=True)
class _Naming:
    final: str
    collided: bool
    invalid_for_target: bool


def _resolve_name(kind: ResourceKind, name: str, context: TransformContext) -> _Naming | None:
    rule = context.target.naming_rule(kind)
    allocator = context.allocator(kind)
    if rule is NamingRule.FREE or context.no_transform:
        final, collided = allocator.claim(name)
        return _Naming(final, collided, not is_valid_name(name, rule))
    candidate = sanitize_name(name)
    if not candidate:
        return None
    final, collided = allocator.claim(candidate)
    return _Naming(final, collided, False)


def _named_outcome(
    kind: ResourceKind,
    name: str,
    naming: _Naming,
    context: TransformContext,
    warnings: list[str] | None = None,
) -> TransformOutcome:
    reasons: list[str] = []
    if naming.collided:
        reasons.append(f"name collided with an earlier {kind.value} entry; using '{naming.final}'")
    if naming.invalid_for_target:
        rule = context.target.naming_rule(kind).value
        reasons.append(f"name is not valid under the target's {rule} rule; sanitization disabled")
    reasons.extend(warnings or [])

    renamed = naming.final != name
    note = SANITIZED_NOTE if renamed else None
    if reasons:
        return TransformOutcome.warned(
            kind, name, "; ".join(reasons), target_name=naming.final, note=note
        )
    if renamed:
        return TransformOutcome.transformed(kind, name, naming.final, SANITIZED_NOTE)
    return TransformOutcome.copied(kind, name)


def _no_valid_name(kind: ResourceKind, name: str) -> TransformResult:
    return TransformResult(
        TransformOutcome.skipped(kind, name, "name has no characters valid for the target")
    )


def transform_mcp_server(
    server: CanonicalMcpServer, context: TransformContext
) -> TransformResult:
    """Server keys carry no naming constraint; fields are remapped by the writer."""
    return TransformResult(
        TransformOutcome.copied(ResourceKind.MCP, server.name),
        server.model_copy(deep=True),
    )


def transform_skill(skill: CanonicalSkill, context: TransformContext) -> TransformResult:
    naming = _resolve_name(ResourceKind.SKILLS, skill.name, context)
    if naming is None:
        return _no_valid_name(ResourceKind.SKILLS, skill.name)
    content = skill.content
    if naming.final != skill.name:
        content = rewrite_frontmatter_name(content, naming.final)
    return TransformResult(
        _named_outcome(ResourceKind.SKILLS, skill.name, naming, context),
        skill.model_copy(update={"name": naming.final, "content": content}),
    )


def transform_command(command: CanonicalCommand, context: TransformContext) -> TransformResult:
    naming = _resolve_name(ResourceKind.COMMANDS, command.name, context)
    if naming is None:
        return _no_valid_name(ResourceKind.COMMANDS, command.name)
    return TransformResult(
        _named_outcome(ResourceKind.COMMANDS, command.name, naming, context),
        command.model_copy(update={"name": naming.final}),
    )


def transform_agent(agent: CanonicalAgent, context: TransformContext) -> TransformResult:
    naming = _resolve_name(ResourceKind.AGENTS, agent.name, context)
    if naming is None:
        return _no_valid_name(ResourceKind.AGENTS, agent.name)

    tools: list[str] = []
    warnings: list[str] = []
    for tool in agent.tools:
        mapped = remap_tool(tool, context.source, context.target.harness)
        if mapped is None:
            warnings.append(UNMAPPED_TOOL.format(tool=tool))
            mapped = tool
        if mapped not in tools:
            tools.append(mapped)

    color = agent.color if "color" in context.target.agent_metadata else None
    return TransformResult(
        _named_outcome(ResourceKind.AGENTS, agent.name, naming, context, warnings),
        agent.model_copy(update={"name": naming.final, "tools": tools, "color": color}),
    )


def transform_setting(setting: tuple[str, str], context: TransformContext) -> TransformResult:
    name, value = setting
    if name == "theme":
        return TransformResult(
            TransformOutcome.skipped(
                ResourceKind.SETTINGS, name, "theme is presentation-only and not portable"
            )
        )
    if name == "model" and context.target.model_selection:
        return TransformResult(TransformOutcome.copied(ResourceKind.SETTINGS, name), setting)
    return TransformResult(
        TransformOutcome.skipped(
            ResourceKind.SETTINGS, name, f"{name} selection unsupported by target harness"
        )
    )


Transformer = Callable[[Any, TransformContext], TransformResult]

TRANSFORMERS: dict[ResourceKind, Transformer] = {
    ResourceKind.MCP: transform_mcp_server,
    ResourceKind.SKILLS: transform_skill,
    ResourceKind.AGENTS: transform_agent,
    ResourceKind.COMMANDS: transform_command,
    ResourceKind.SETTINGS: transform_setting,
}


def transform_resource(
    kind: ResourceKind, resource: Any, context: TransformContext
) -> TransformResult:
    """Dispatch ``resource`` to the strategy for ``kind``."""
    return TRANSFORMERS[kind](resource, context)

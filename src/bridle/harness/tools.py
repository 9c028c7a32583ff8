"""Agent tool vocabularies per harness.

Each harness maps its native tool names onto a shared canonical vocabulary.
A source/target pair lookup goes native -> canonical -> native, so adding a
harness means adding one table rather than one per pair.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from .config import Harness

TOOL_VOCABULARY: Mapping[Harness, Mapping[str, str]] = MappingProxyType(
    {
        Harness.CLAUDE_CODE: MappingProxyType(
            {
                "Read": "read",
                "Write": "write",
                "Edit": "edit",
                "MultiEdit": "multiedit",
                "Bash": "bash",
                "Grep": "grep",
                "Glob": "glob",
                "LS": "list",
                "WebFetch": "webfetch",
                "WebSearch": "websearch",
                "Task": "task",
                "TodoWrite": "todowrite",
            }
        ),
        Harness.OPENCODE: MappingProxyType(
            {
                "read": "read",
                "write": "write",
                "edit": "edit",
                "patch": "multiedit",
                "bash": "bash",
                "grep": "grep",
                "glob": "glob",
                "list": "list",
                "webfetch": "webfetch",
                "task": "task",
                "todowrite": "todowrite",
            }
        ),
        Harness.GOOSE: MappingProxyType({}),
        Harness.AMP_CODE: MappingProxyType({}),
    }
)


def _reverse(vocabulary: Mapping[str, str]) -> dict[str, str]:
    reverse: dict[str, str] = {}
    for native, canonical in vocabulary.items():
        reverse.setdefault(canonical, native)
    return reverse


_NATIVE_BY_CANONICAL: Mapping[Harness, Mapping[str, str]] = MappingProxyType(
    {harness: MappingProxyType(_reverse(vocab)) for harness, vocab in TOOL_VOCABULARY.items()}
)


def remap_tool(name: str, source: Harness, target: Harness) -> str | None:
    """Translate a native tool name from ``source`` into ``target``'s vocabulary.

    Returns None when either side does not know the tool.
    """
    canonical = TOOL_VOCABULARY[source].get(name)
    if canonical is None:
        return None
    return _NATIVE_BY_CANONICAL[target].get(canonical)

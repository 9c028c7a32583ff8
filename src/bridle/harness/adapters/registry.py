"""Adapter registry wiring harnesses to their format adapters."""

from __future__ import annotations

from collections.abc import Callable

from ..config import Harness
from .amp_code import AmpCodeAdapter
from .base import ProfileAdapter
from .claude_code import ClaudeCodeAdapter
from .goose import GooseAdapter
from .opencode import OpenCodeAdapter

AdapterFactory = Callable[[], ProfileAdapter]


class AdapterRegistry:
    """Simple registry mapping harnesses to adapter factories."""

    def __init__(self) -> None:
        self._factories: dict[Harness, AdapterFactory] = {}

    def register(self, harness: Harness, factory: AdapterFactory) -> None:
        self._factories[harness] = factory

    def has(self, harness: Harness) -> bool:
        return harness in self._factories

    def resolve(self, harness: Harness) -> ProfileAdapter:
        if harness not in self._factories:
            raise ValueError(f"No adapter registered for harness {harness.value}")
        return self._factories[harness]()


registry = AdapterRegistry()


registry.register(Harness.CLAUDE_CODE, ClaudeCodeAdapter)
registry.register(Harness.OPENCODE, OpenCodeAdapter)
registry.register(Harness.GOOSE, GooseAdapter)
registry.register(Harness.AMP_CODE, AmpCodeAdapter)

"""Harness format adapter implementations."""

from .amp_code import AmpCodeAdapter
from .base import ProfileAdapter
from .claude_code import ClaudeCodeAdapter
from .goose import GooseAdapter
from .opencode import OpenCodeAdapter
from .registry import AdapterRegistry, registry

__all__ = [
    "AdapterRegistry",
    "AmpCodeAdapter",
    "ClaudeCodeAdapter",
    "GooseAdapter",
    "OpenCodeAdapter",
    "ProfileAdapter",
    "registry",
]

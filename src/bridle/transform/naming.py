"""Name sanitization and per-run collision handling."""

from __future__ import annotations

import re

from ..harness.config import NamingRule

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def sanitize_name(name: str) -> str:
    """Lowercase, collapse non-alphanumeric runs to one hyphen, trim hyphens.

    Idempotent: ``sanitize_name(sanitize_name(x)) == sanitize_name(x)``.
    """
    return _NON_ALNUM.sub("-", name.lower()).strip("-")


def is_valid_name(name: str, rule: NamingRule) -> bool:
    if rule is NamingRule.FREE:
        return bool(name)
    return bool(name) and sanitize_name(name) == name


class NameAllocator:
    """Hands out unique names within one kind for one copy run."""

    def __init__(self) -> None:
        self._taken: set[str] = set()

    def claim(self, name: str) -> tuple[str, bool]:
        """Reserve ``name``, suffixing ``-2``, ``-3``... on collision.

        Returns the reserved name and whether a collision was resolved.
        """
        if name not in self._taken:
            self._taken.add(name)
            return name, False
        suffix = 2
        while f"{name}-{suffix}" in self._taken:
            suffix += 1
        resolved = f"{name}-{suffix}"
        self._taken.add(resolved)
        return resolved, True

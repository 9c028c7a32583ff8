"""YAML frontmatter helpers for markdown resources."""

from __future__ import annotations

import re
from typing import Any

import yaml

FRONTMATTER_PATTERN = re.compile(r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)", re.DOTALL)
NAME_LINE_PATTERN = re.compile(r"^name[ \t]*:.*$", re.MULTILINE)


def split_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Split a markdown document into (frontmatter mapping, body)."""
    match = FRONTMATTER_PATTERN.match(text)
    if match is None:
        return {}, text
    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError:
        return {}, text
    if not isinstance(data, dict):
        return {}, text
    return data, text[match.end() :]


def render_frontmatter(data: dict[str, Any], body: str) -> str:
    """Render a mapping as frontmatter followed by ``body``.

    Keys keep insertion order; ``None`` values are left out.
    """
    fields = {key: value for key, value in data.items() if value is not None}
    if not fields:
        return body
    header = yaml.safe_dump(fields, sort_keys=False, allow_unicode=True, width=1000)
    return f"---\n{header}---\n{body}"


def rewrite_frontmatter_name(text: str, new_name: str) -> str:
    """Replace the ``name:`` entry of the frontmatter, leaving everything else alone."""
    match = FRONTMATTER_PATTERN.match(text)
    if match is None:
        return text
    block = match.group(1)
    rendered = yaml.safe_dump({"name": new_name}, allow_unicode=True, width=1000).strip()
    if NAME_LINE_PATTERN.search(block) is None:
        return text
    new_block = NAME_LINE_PATTERN.sub(lambda _: rendered, block, count=1)
    start, end = match.span(1)
    return text[:start] + new_block + text[end:]

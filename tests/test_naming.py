"""Tests for name sanitization and collision handling."""

import pytest

from bridle.harness.config import NamingRule
from bridle.transform.naming import NameAllocator, is_valid_name, sanitize_name


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("Code Review Guide", "code-review-guide"),
        ("code-review", "code-review"),
        ("  Fix__The  Bug!! ", "fix-the-bug"),
        ("--Leading and trailing--", "leading-and-trailing"),
        ("v2.0 Release Notes", "v2-0-release-notes"),
        ("ALLCAPS", "allcaps"),
        ("!!!", ""),
    ],
)
def test_sanitize_name(name: str, expected: str):
    assert sanitize_name(name) == expected


@pytest.mark.parametrize(
    "name",
    ["Code Review Guide", "a  b", "Ünïcode Skill", "x--y", "-z-", "already-valid"],
)
def test_sanitize_is_idempotent(name: str):
    once = sanitize_name(name)
    assert sanitize_name(once) == once


def test_is_valid_name_under_each_rule():
    assert is_valid_name("Code Review", NamingRule.FREE)
    assert not is_valid_name("Code Review", NamingRule.LOWERCASE_HYPHENATED)
    assert is_valid_name("code-review", NamingRule.LOWERCASE_HYPHENATED)
    assert not is_valid_name("", NamingRule.FREE)


def test_allocator_appends_numeric_suffixes():
    allocator = NameAllocator()

    assert allocator.claim("code-review") == ("code-review", False)
    assert allocator.claim("code-review") == ("code-review-2", True)
    assert allocator.claim("code-review") == ("code-review-3", True)


def test_allocator_skips_suffixes_already_taken():
    allocator = NameAllocator()
    allocator.claim("deploy")
    allocator.claim("deploy-2")

    assert allocator.claim("deploy") == ("deploy-3", True)

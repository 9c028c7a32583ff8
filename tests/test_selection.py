"""Tests for the selection filter."""

from bridle.harness.config import ResourceKind
from bridle.schemas.options import CopyOptions
from bridle.schemas.profile import CanonicalProfile
from bridle.selection import active_kinds, select_resources


def _names(profile: CanonicalProfile) -> dict[ResourceKind, list[str]]:
    return profile.resource_names()


def test_defaults_keep_everything_but_disabled_servers(sample_profile: CanonicalProfile):
    selected = select_resources(sample_profile, CopyOptions())

    names = _names(selected)
    assert names[ResourceKind.MCP] == ["github", "postgres"]
    assert names[ResourceKind.SKILLS] == ["Code Review Guide"]
    assert names[ResourceKind.AGENTS] == ["code-reviewer"]
    assert names[ResourceKind.COMMANDS] == ["deploy"]
    assert names[ResourceKind.SETTINGS] == ["model", "theme"]


def test_include_restricts_to_listed_kinds(sample_profile: CanonicalProfile):
    options = CopyOptions(include={ResourceKind.SKILLS}, exclude={ResourceKind.SKILLS})

    selected = select_resources(sample_profile, options)

    assert active_kinds(options) == [ResourceKind.SKILLS]
    assert [s.name for s in selected.skills] == ["Code Review Guide"]
    assert selected.mcp_servers == []
    assert selected.agents == []
    assert selected.settings.model is None


def test_exclude_drops_kinds(sample_profile: CanonicalProfile):
    options = CopyOptions(exclude={ResourceKind.AGENTS, ResourceKind.SETTINGS})

    selected = select_resources(sample_profile, options)

    assert selected.agents == []
    assert selected.settings.items() == []
    assert len(selected.mcp_servers) == 2


def test_interactive_selection_restricts_within_kind(sample_profile: CanonicalProfile):
    options = CopyOptions(interactive_selection={ResourceKind.MCP: {"postgres"}})

    selected = select_resources(sample_profile, options)

    assert [s.name for s in selected.mcp_servers] == ["postgres"]
    assert [s.name for s in selected.skills] == ["Code Review Guide"]


def test_interactive_selection_cannot_revive_excluded_kind(sample_profile: CanonicalProfile):
    options = CopyOptions(
        exclude={ResourceKind.MCP},
        interactive_selection={ResourceKind.MCP: {"github"}},
    )

    selected = select_resources(sample_profile, options)

    assert selected.mcp_servers == []


def test_disabled_server_reenabled_by_explicit_pick(sample_profile: CanonicalProfile):
    options = CopyOptions(interactive_selection={ResourceKind.MCP: {"legacy", "github"}})

    selected = select_resources(sample_profile, options)

    assert [s.name for s in selected.mcp_servers] == ["github", "legacy"]
    assert all(server.enabled for server in selected.mcp_servers)
    assert sample_profile.mcp_servers[2].enabled is False


def test_settings_are_selectable_by_name(sample_profile: CanonicalProfile):
    options = CopyOptions(interactive_selection={ResourceKind.SETTINGS: {"model"}})

    selected = select_resources(sample_profile, options)

    assert selected.settings.model == "claude-sonnet-4-5"
    assert selected.settings.theme is None


def test_everything_filtered_leaves_empty_profile(sample_profile: CanonicalProfile):
    options = CopyOptions(
        include={ResourceKind.SKILLS},
        interactive_selection={ResourceKind.SKILLS: {"missing"}},
    )

    assert select_resources(sample_profile, options).is_empty()

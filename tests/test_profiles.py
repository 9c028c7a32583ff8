"""Tests for profile storage."""

from pathlib import Path

import pytest

from bridle.errors import InvalidProfileFile, ProfileExists, ProfileNotFound
from bridle.harness.config import Harness
from bridle.profiles import ProfileStore, validate_profile_name


@pytest.mark.parametrize("name", ["work", "work.2", "my_profile", "A-1"])
def test_valid_profile_names(name: str):
    assert validate_profile_name(name) == name


@pytest.mark.parametrize("name", ["", ".hidden", "-dash", "a/b", "..", "with space"])
def test_invalid_profile_names(name: str):
    with pytest.raises(ValueError, match="Invalid profile name"):
        validate_profile_name(name)


def test_profile_path_layout(store: ProfileStore, profiles_dir: Path):
    assert store.profile_path(Harness.OPENCODE, "work") == profiles_dir / "opencode" / "work"


def test_list_profiles_sorted_and_ignores_bookkeeping(store: ProfileStore):
    store.create_profile(Harness.GOOSE, "zeta")
    store.create_profile(Harness.GOOSE, "alpha")
    root = store.harness_dir(Harness.GOOSE)
    (root / ".bridle-stage-alpha-abc").mkdir()
    (root / ".alpha.bridle-commit").write_text("{}")

    assert store.list_profiles(Harness.GOOSE) == ["alpha", "zeta"]
    assert store.list_profiles(Harness.AMP_CODE) == []


def test_create_existing_profile_fails(store: ProfileStore):
    store.create_profile(Harness.GOOSE, "work")

    with pytest.raises(ProfileExists):
        store.create_profile(Harness.GOOSE, "work")


def test_delete_profile(store: ProfileStore):
    store.create_profile(Harness.GOOSE, "work")

    store.delete_profile(Harness.GOOSE, "work")

    assert not store.profile_exists(Harness.GOOSE, "work")
    with pytest.raises(ProfileNotFound):
        store.delete_profile(Harness.GOOSE, "work")


def test_show_profile_summarizes_resources(store: ProfileStore, claude_source: Path):
    info = store.show_profile(Harness.CLAUDE_CODE, "work")

    assert info.harness == "claude-code"
    assert info.path == str(claude_source)
    assert info.mcp_servers == ["github", "postgres"]
    assert info.skills == ["Code Review Guide"]
    assert info.agents == ["code-reviewer"]
    assert info.commands == []
    assert info.model is None


def test_show_missing_profile(store: ProfileStore):
    with pytest.raises(ProfileNotFound):
        store.show_profile(Harness.OPENCODE, "nope")


def test_active_profile_round_trip(store: ProfileStore):
    store.create_profile(Harness.GOOSE, "work")
    store.create_profile(Harness.OPENCODE, "home")

    assert store.active_profile(Harness.GOOSE) is None
    store.set_active(Harness.GOOSE, "work")
    store.set_active(Harness.OPENCODE, "home")

    assert store.active_profile(Harness.GOOSE) == "work"
    assert ProfileStore(store.profiles_dir).active_profile(Harness.OPENCODE) == "home"
    assert store.list_profiles(Harness.GOOSE) == ["work"]

    store.clear_active(Harness.GOOSE)

    assert store.active_profile(Harness.GOOSE) is None
    assert store.active_profile(Harness.OPENCODE) == "home"


def test_activate_missing_profile_fails(store: ProfileStore):
    with pytest.raises(ProfileNotFound):
        store.set_active(Harness.GOOSE, "nope")

    assert not store.active_path.exists()


def test_delete_clears_active_entry(store: ProfileStore):
    store.create_profile(Harness.GOOSE, "work")
    store.create_profile(Harness.GOOSE, "spare")
    store.set_active(Harness.GOOSE, "work")

    store.delete_profile(Harness.GOOSE, "spare")
    assert store.active_profile(Harness.GOOSE) == "work"

    store.delete_profile(Harness.GOOSE, "work")
    assert store.active_profile(Harness.GOOSE) is None


def test_show_profile_reports_active_flag(store: ProfileStore, claude_source: Path):
    assert store.show_profile(Harness.CLAUDE_CODE, "work").active is False

    store.set_active(Harness.CLAUDE_CODE, "work")

    assert store.show_profile(Harness.CLAUDE_CODE, "work").active is True


def test_corrupt_active_file_is_invalid(store: ProfileStore):
    store.active_path.write_text("{broken")

    with pytest.raises(InvalidProfileFile, match=".bridle-active.json"):
        store.active_profile(Harness.GOOSE)

"""Profile storage under ``<profiles_dir>/<harness>/<profile>``."""

from __future__ import annotations

import re
import shutil
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from .errors import InvalidProfileFile, ProfileExists, ProfileNotFound
from .harness.adapters.registry import AdapterRegistry, registry
from .harness.config import Harness
from .staging import write_text_atomic

PROFILE_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9._-]*$")
ACTIVE_FILENAME = ".bridle-active.json"


def validate_profile_name(name: str) -> str:
    """Return ``name`` when usable as a profile directory name."""
    if not PROFILE_NAME_PATTERN.fullmatch(name):
        raise ValueError(
            f"Invalid profile name '{name}'. Use letters, digits, '.', '-' or '_' "
            "and do not start with '.' or '-'."
        )
    return name


class ProfileInfo(BaseModel):
    """Summary of a stored profile."""

    name: str
    harness: str
    path: str
    mcp_servers: list[str] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    agents: list[str] = Field(default_factory=list)
    commands: list[str] = Field(default_factory=list)
    model: str | None = None
    theme: str | None = None
    active: bool = False


class ActiveProfiles(BaseModel):
    """Active profile name per harness id."""

    active: dict[str, str] = Field(default_factory=dict)


class ProfileStore:
    """Filesystem layout of stored profiles."""

    def __init__(self, profiles_dir: Path, adapters: AdapterRegistry = registry) -> None:
        self.profiles_dir = profiles_dir
        self.adapters = adapters

    def harness_dir(self, harness: Harness) -> Path:
        return self.profiles_dir / harness.value

    def profile_path(self, harness: Harness, name: str) -> Path:
        return self.harness_dir(harness) / validate_profile_name(name)

    def profile_exists(self, harness: Harness, name: str) -> bool:
        return self.profile_path(harness, name).is_dir()

    def list_profiles(self, harness: Harness) -> list[str]:
        """Profile names for ``harness``, sorted; hidden bookkeeping entries ignored."""
        root = self.harness_dir(harness)
        if not root.is_dir():
            return []
        return sorted(
            entry.name
            for entry in root.iterdir()
            if entry.is_dir() and PROFILE_NAME_PATTERN.fullmatch(entry.name)
        )

    def create_profile(self, harness: Harness, name: str) -> Path:
        path = self.profile_path(harness, name)
        if path.exists():
            raise ProfileExists(f"Profile {harness.value}/{name} already exists")
        path.mkdir(parents=True)
        return path

    def delete_profile(self, harness: Harness, name: str) -> None:
        path = self.profile_path(harness, name)
        if not path.exists():
            raise ProfileNotFound(f"Profile {harness.value}/{name} not found")
        shutil.rmtree(path)
        if self.active_profile(harness) == name:
            self.clear_active(harness)

    # ------------------------------------------------------------------
    # Active profile per harness
    # ------------------------------------------------------------------
    @property
    def active_path(self) -> Path:
        return self.profiles_dir / ACTIVE_FILENAME

    def _load_active(self) -> ActiveProfiles:
        path = self.active_path
        if not path.is_file():
            return ActiveProfiles()
        try:
            return ActiveProfiles.model_validate_json(path.read_text(encoding="utf-8"))
        except ValidationError as exc:
            raise InvalidProfileFile(path, str(exc)) from exc

    def _save_active(self, state: ActiveProfiles) -> None:
        self.profiles_dir.mkdir(parents=True, exist_ok=True)
        write_text_atomic(self.active_path, state.model_dump_json(indent=2) + "\n")

    def active_profile(self, harness: Harness) -> str | None:
        return self._load_active().active.get(harness.value)

    def set_active(self, harness: Harness, name: str) -> None:
        """Mark an existing profile as the one in use for ``harness``."""
        if not self.profile_exists(harness, name):
            raise ProfileNotFound(f"Profile {harness.value}/{name} not found")
        state = self._load_active()
        state.active[harness.value] = name
        self._save_active(state)

    def clear_active(self, harness: Harness) -> None:
        state = self._load_active()
        if state.active.pop(harness.value, None) is not None:
            self._save_active(state)

    def show_profile(self, harness: Harness, name: str) -> ProfileInfo:
        """Extract a profile and summarize what it holds."""
        path = self.profile_path(harness, name)
        profile = self.adapters.resolve(harness).extract(path)
        return ProfileInfo(
            name=name,
            harness=harness.value,
            path=str(path),
            mcp_servers=[server.name for server in profile.mcp_servers],
            skills=[skill.name for skill in profile.skills],
            agents=[agent.name for agent in profile.agents],
            commands=[command.name for command in profile.commands],
            model=profile.settings.model,
            theme=profile.settings.theme,
            active=self.active_profile(harness) == name,
        )

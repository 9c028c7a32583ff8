"""Base interface for harness format adapters.

Adapters translate between a harness's native files inside a profile
directory and the canonical profile model. The copy engine only ever calls
``extract`` and ``write``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, ClassVar

from pydantic import ValidationError

from ...errors import InvalidProfileFile, ProfileNotFound, WriteError
from ...markdown import split_frontmatter
from ...schemas.profile import (
    CanonicalAgent,
    CanonicalCommand,
    CanonicalMcpServer,
    CanonicalProfile,
    CanonicalSettings,
    CanonicalSkill,
    RejectedResource,
)
from ..config import Harness, ResourceKind

logger = logging.getLogger(__name__)

SKILL_FILENAME = "SKILL.md"

NativeConfig = tuple[list[CanonicalMcpServer], CanonicalSettings, list[RejectedResource]]


def read_json(path: Path) -> dict[str, Any]:
    if not path.is_file():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except ValueError as exc:
        raise InvalidProfileFile(path, str(exc)) from exc
    return data if isinstance(data, dict) else {}


def write_json(path: Path, data: dict[str, Any]) -> None:
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


class ProfileAdapter:
    """Base adapter contract for all harness formats."""

    harness: ClassVar[Harness]
    skills_dir: ClassVar[str | None] = "skills"
    agents_dir: ClassVar[str | None] = None
    commands_dir: ClassVar[str | None] = None

    # ------------------------------------------------------------------
    # Engine contract
    # ------------------------------------------------------------------
    def extract(self, profile_dir: Path) -> CanonicalProfile:
        """Read a profile directory into canonical form."""
        if not profile_dir.is_dir():
            raise ProfileNotFound(
                f"No {self.harness.value} profile at {profile_dir}"
            )
        servers, settings, rejected = self.read_config(profile_dir)
        return CanonicalProfile(
            mcp_servers=servers,
            skills=self.read_skills(profile_dir),
            agents=self.read_agents(profile_dir),
            commands=self.read_commands(profile_dir),
            settings=settings,
            rejected=rejected,
        )

    def write(self, profile_dir: Path, profile: CanonicalProfile) -> None:
        """Write ``profile`` as native files under ``profile_dir``."""
        try:
            profile_dir.mkdir(parents=True, exist_ok=True)
            self.write_config(profile_dir, profile.mcp_servers, profile.settings)
            for skill in profile.skills:
                self.write_skill(profile_dir, skill)
            for agent in profile.agents:
                self.write_agent(profile_dir, agent)
            for command in profile.commands:
                self.write_command(profile_dir, command)
        except OSError as exc:
            raise WriteError(
                f"Failed to write {self.harness.value} profile at {profile_dir}: {exc}"
            ) from exc

    # ------------------------------------------------------------------
    # Config file (MCP servers + settings)
    # ------------------------------------------------------------------
    def read_config(self, profile_dir: Path) -> NativeConfig:
        """Servers, settings and rejected server entries from the config file(s)."""
        raise NotImplementedError

    def write_config(
        self,
        profile_dir: Path,
        servers: list[CanonicalMcpServer],
        settings: CanonicalSettings,
    ) -> None:
        raise NotImplementedError

    def _build_servers(
        self, entries: list[dict[str, Any]]
    ) -> tuple[list[CanonicalMcpServer], list[RejectedResource]]:
        servers: list[CanonicalMcpServer] = []
        rejected: list[RejectedResource] = []
        for entry in entries:
            try:
                servers.append(CanonicalMcpServer.model_validate(entry))
            except ValidationError as exc:
                error = exc.errors()[0]
                location = ".".join(str(part) for part in error["loc"])
                reason = f"{location}: {error['msg']}" if location else error["msg"]
                logger.warning(
                    "Invalid %s MCP server '%s': %s",
                    self.harness.value,
                    entry.get("name"),
                    reason,
                )
                rejected.append(
                    RejectedResource(
                        kind=ResourceKind.MCP, name=str(entry.get("name")), reason=reason
                    )
                )
        return servers, rejected

    # ------------------------------------------------------------------
    # Skills
    # ------------------------------------------------------------------
    def read_skills(self, profile_dir: Path) -> list[CanonicalSkill]:
        if self.skills_dir is None:
            return []
        root = profile_dir / self.skills_dir
        if not root.is_dir():
            return []
        skills = []
        for skill_dir in sorted(p for p in root.iterdir() if p.is_dir()):
            skill_file = skill_dir / SKILL_FILENAME
            if not skill_file.is_file():
                continue
            content = skill_file.read_text(encoding="utf-8")
            frontmatter, _ = split_frontmatter(content)
            skills.append(
                CanonicalSkill(
                    name=skill_dir.name,
                    description=str(frontmatter.get("description") or ""),
                    content=content,
                )
            )
        return skills

    def write_skill(self, profile_dir: Path, skill: CanonicalSkill) -> None:
        if self.skills_dir is None:
            return
        skill_dir = profile_dir / self.skills_dir / skill.name
        skill_dir.mkdir(parents=True, exist_ok=True)
        (skill_dir / SKILL_FILENAME).write_text(skill.content, encoding="utf-8")

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def read_commands(self, profile_dir: Path) -> list[CanonicalCommand]:
        if self.commands_dir is None:
            return []
        root = profile_dir / self.commands_dir
        if not root.is_dir():
            return []
        commands = []
        for path in sorted(root.glob("*.md")):
            content = path.read_text(encoding="utf-8")
            frontmatter, _ = split_frontmatter(content)
            commands.append(
                CanonicalCommand(
                    name=path.stem,
                    description=str(frontmatter.get("description") or ""),
                    content=content,
                )
            )
        return commands

    def write_command(self, profile_dir: Path, command: CanonicalCommand) -> None:
        if self.commands_dir is None:
            return
        root = profile_dir / self.commands_dir
        root.mkdir(parents=True, exist_ok=True)
        (root / f"{command.name}.md").write_text(command.content, encoding="utf-8")

    # ------------------------------------------------------------------
    # Agents
    # ------------------------------------------------------------------
    def read_agents(self, profile_dir: Path) -> list[CanonicalAgent]:
        if self.agents_dir is None:
            return []
        root = profile_dir / self.agents_dir
        if not root.is_dir():
            return []
        return [
            self.parse_agent(path.stem, path.read_text(encoding="utf-8"))
            for path in sorted(root.glob("*.md"))
        ]

    def write_agent(self, profile_dir: Path, agent: CanonicalAgent) -> None:
        if self.agents_dir is None:
            return
        root = profile_dir / self.agents_dir
        root.mkdir(parents=True, exist_ok=True)
        (root / f"{agent.name}.md").write_text(self.render_agent(agent), encoding="utf-8")

    def parse_agent(self, name: str, text: str) -> CanonicalAgent:
        raise NotImplementedError

    def render_agent(self, agent: CanonicalAgent) -> str:
        raise NotImplementedError

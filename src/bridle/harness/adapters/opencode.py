"""OpenCode profile format adapter."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ...markdown import render_frontmatter, split_frontmatter
from ...schemas.profile import CanonicalAgent, CanonicalMcpServer, CanonicalSettings
from ..config import Harness
from .base import NativeConfig, ProfileAdapter, read_json, write_json

SCHEMA_URL = "https://opencode.ai/config.json"


class OpenCodeAdapter(ProfileAdapter):
    """Reads and writes ``opencode.json`` and the singular-named resource dirs."""

    harness = Harness.OPENCODE
    CONFIG_FILENAME = "opencode.json"
    skills_dir = "skill"
    agents_dir = "agent"
    commands_dir = "command"

    def read_config(self, profile_dir: Path) -> NativeConfig:
        config = read_json(profile_dir / self.CONFIG_FILENAME)
        entries = []
        for name, entry in (config.get("mcp") or {}).items():
            if not isinstance(entry, dict):
                continue
            env = entry.get("environment", {})
            if entry.get("type") == "remote":
                entries.append(
                    {
                        "name": name,
                        "enabled": entry.get("enabled", True),
                        "transport": "http",
                        "url": entry.get("url"),
                        "env": env,
                    }
                )
                continue
            command = entry.get("command") or []
            if isinstance(command, str):
                command = [command]
            entries.append(
                {
                    "name": name,
                    "enabled": entry.get("enabled", True),
                    "transport": "stdio",
                    "command": command[0] if command else None,
                    "args": command[1:],
                    "env": env,
                }
            )
        servers, rejected = self._build_servers(entries)
        return (
            servers,
            CanonicalSettings(model=config.get("model"), theme=config.get("theme")),
            rejected,
        )

    def write_config(
        self,
        profile_dir: Path,
        servers: list[CanonicalMcpServer],
        settings: CanonicalSettings,
    ) -> None:
        values = dict(settings.items())
        if not servers and not values:
            return
        config: dict[str, Any] = {"$schema": SCHEMA_URL, **values}
        if servers:
            config["mcp"] = {server.name: _native_server(server) for server in servers}
        write_json(profile_dir / self.CONFIG_FILENAME, config)

    def parse_agent(self, name: str, text: str) -> CanonicalAgent:
        frontmatter, body = split_frontmatter(text)
        tools = frontmatter.get("tools") or {}
        if isinstance(tools, dict):
            names = [str(tool) for tool, enabled in tools.items() if enabled]
        else:
            names = [str(tool) for tool in tools]
        return CanonicalAgent(
            name=name,
            description=str(frontmatter.get("description") or ""),
            prompt=body.strip("\n"),
            tools=names,
        )

    def render_agent(self, agent: CanonicalAgent) -> str:
        frontmatter = {
            "description": agent.description,
            "mode": "subagent",
            "tools": {tool: True for tool in agent.tools} or None,
        }
        return render_frontmatter(frontmatter, f"\n{agent.prompt}\n")


def _native_server(server: CanonicalMcpServer) -> dict[str, Any]:
    if server.transport == "stdio":
        entry: dict[str, Any] = {"type": "local", "command": [server.command, *server.args]}
    else:
        # every remote transport is "remote"; it reads back as http
        entry = {"type": "remote", "url": server.url}
    if server.env:
        entry["environment"] = dict(server.env)
    entry["enabled"] = server.enabled
    return entry

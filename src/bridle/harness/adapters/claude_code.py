"""Claude Code profile format adapter."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ...markdown import render_frontmatter, split_frontmatter
from ...schemas.profile import CanonicalAgent, CanonicalMcpServer, CanonicalSettings
from ..config import Harness
from .base import NativeConfig, ProfileAdapter, read_json, write_json


class ClaudeCodeAdapter(ProfileAdapter):
    """Reads and writes ``.mcp.json``, ``settings.json`` and markdown resources."""

    harness = Harness.CLAUDE_CODE
    MCP_FILENAME = ".mcp.json"
    SETTINGS_FILENAME = "settings.json"
    skills_dir = "skills"
    agents_dir = "agents"
    commands_dir = "commands"

    def read_config(self, profile_dir: Path) -> NativeConfig:
        servers = read_json(profile_dir / self.MCP_FILENAME).get("mcpServers", {})
        entries = []
        for name, entry in servers.items():
            if not isinstance(entry, dict):
                continue
            transport = entry.get("type") or ("stdio" if "command" in entry else "http")
            entries.append(
                {
                    "name": name,
                    "enabled": not entry.get("disabled", False),
                    "transport": transport,
                    "command": entry.get("command"),
                    "args": entry.get("args", []),
                    "url": entry.get("url"),
                    "env": entry.get("env", {}),
                }
            )
        servers, rejected = self._build_servers(entries)
        settings = read_json(profile_dir / self.SETTINGS_FILENAME)
        return (
            servers,
            CanonicalSettings(model=settings.get("model"), theme=settings.get("theme")),
            rejected,
        )

    def write_config(
        self,
        profile_dir: Path,
        servers: list[CanonicalMcpServer],
        settings: CanonicalSettings,
    ) -> None:
        if servers:
            write_json(
                profile_dir / self.MCP_FILENAME,
                {"mcpServers": {server.name: _native_server(server) for server in servers}},
            )
        values = dict(settings.items())
        if values:
            write_json(profile_dir / self.SETTINGS_FILENAME, values)

    def parse_agent(self, name: str, text: str) -> CanonicalAgent:
        frontmatter, body = split_frontmatter(text)
        tools = frontmatter.get("tools") or []
        if isinstance(tools, str):
            tools = [tool.strip() for tool in tools.split(",") if tool.strip()]
        return CanonicalAgent(
            name=name,
            description=str(frontmatter.get("description") or ""),
            prompt=body.strip("\n"),
            tools=[str(tool) for tool in tools],
            color=frontmatter.get("color"),
        )

    def render_agent(self, agent: CanonicalAgent) -> str:
        frontmatter = {
            "name": agent.name,
            "description": agent.description,
            "tools": ", ".join(agent.tools) if agent.tools else None,
            "color": agent.color,
        }
        return render_frontmatter(frontmatter, f"\n{agent.prompt}\n")


def _native_server(server: CanonicalMcpServer) -> dict[str, Any]:
    if server.transport == "stdio":
        entry: dict[str, Any] = {"command": server.command, "args": list(server.args)}
    else:
        # streamable-http has no separate type here; it reads back as http
        transport = "sse" if server.transport == "sse" else "http"
        entry = {"type": transport, "url": server.url}
    if server.env:
        entry["env"] = dict(server.env)
    if not server.enabled:
        entry["disabled"] = True
    return entry

"""Amp profile format adapter."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ...schemas.profile import CanonicalMcpServer, CanonicalSettings
from ..config import Harness
from .base import NativeConfig, ProfileAdapter, read_json, write_json


class AmpCodeAdapter(ProfileAdapter):
    """Reads and writes ``amp.mcpServers`` in ``settings.json`` plus skills and commands."""

    harness = Harness.AMP_CODE
    SETTINGS_FILENAME = "settings.json"
    SERVERS_KEY = "amp.mcpServers"
    skills_dir = "skills"
    commands_dir = "commands"

    def read_config(self, profile_dir: Path) -> NativeConfig:
        servers = read_json(profile_dir / self.SETTINGS_FILENAME).get(self.SERVERS_KEY, {})
        entries = []
        for name, entry in servers.items():
            if not isinstance(entry, dict):
                continue
            entries.append(
                {
                    "name": name,
                    "enabled": not entry.get("disabled", False),
                    "transport": "stdio" if "command" in entry else "http",
                    "command": entry.get("command"),
                    "args": entry.get("args", []),
                    "url": entry.get("url"),
                    "env": entry.get("env", {}),
                }
            )
        servers, rejected = self._build_servers(entries)
        return servers, CanonicalSettings(), rejected

    def write_config(
        self,
        profile_dir: Path,
        servers: list[CanonicalMcpServer],
        settings: CanonicalSettings,
    ) -> None:
        if not servers:
            return
        write_json(
            profile_dir / self.SETTINGS_FILENAME,
            {self.SERVERS_KEY: {server.name: _native_server(server) for server in servers}},
        )


def _native_server(server: CanonicalMcpServer) -> dict[str, Any]:
    if server.transport == "stdio":
        entry: dict[str, Any] = {"command": server.command, "args": list(server.args)}
    else:
        entry = {"url": server.url}
    if server.env:
        entry["env"] = dict(server.env)
    if not server.enabled:
        entry["disabled"] = True
    return entry

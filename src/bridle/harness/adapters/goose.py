"""Goose profile format adapter."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from ...errors import InvalidProfileFile
from ...schemas.profile import CanonicalMcpServer, CanonicalSettings
from ..config import Harness
from .base import NativeConfig, ProfileAdapter

logger = logging.getLogger(__name__)

# goose extension type -> canonical transport
EXTENSION_TRANSPORTS = {
    "stdio": "stdio",
    "sse": "sse",
    "streamable_http": "streamable-http",
}
DEFAULT_TIMEOUT = 300


class GooseAdapter(ProfileAdapter):
    """Reads and writes goose ``config.yaml`` extensions plus skills."""

    harness = Harness.GOOSE
    CONFIG_FILENAME = "config.yaml"
    MODEL_KEY = "GOOSE_MODEL"
    skills_dir = "skills"

    def _load(self, profile_dir: Path) -> dict[str, Any]:
        path = profile_dir / self.CONFIG_FILENAME
        if not path.is_file():
            return {}
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (yaml.YAMLError, UnicodeDecodeError) as exc:
            raise InvalidProfileFile(path, str(exc)) from exc
        return data if isinstance(data, dict) else {}

    def read_config(self, profile_dir: Path) -> NativeConfig:
        config = self._load(profile_dir)
        entries = []
        for name, entry in (config.get("extensions") or {}).items():
            if not isinstance(entry, dict):
                continue
            transport = EXTENSION_TRANSPORTS.get(entry.get("type", ""))
            if transport is None:
                logger.debug("Skipping goose extension '%s' of type %s", name, entry.get("type"))
                continue
            entries.append(
                {
                    "name": name,
                    "enabled": entry.get("enabled", True),
                    "transport": transport,
                    "command": entry.get("cmd"),
                    "args": entry.get("args") or [],
                    "url": entry.get("uri"),
                    "env": entry.get("envs") or {},
                }
            )
        servers, rejected = self._build_servers(entries)
        return servers, CanonicalSettings(model=config.get(self.MODEL_KEY)), rejected

    def write_config(
        self,
        profile_dir: Path,
        servers: list[CanonicalMcpServer],
        settings: CanonicalSettings,
    ) -> None:
        config: dict[str, Any] = {}
        if settings.model is not None:
            config[self.MODEL_KEY] = settings.model
        if servers:
            config["extensions"] = {server.name: _native_extension(server) for server in servers}
        if not config:
            return
        with open(profile_dir / self.CONFIG_FILENAME, "w", encoding="utf-8") as f:
            yaml.safe_dump(config, f, sort_keys=False, allow_unicode=True)


def _native_extension(server: CanonicalMcpServer) -> dict[str, Any]:
    entry: dict[str, Any] = {"name": server.name, "enabled": server.enabled}
    if server.transport == "stdio":
        entry.update({"type": "stdio", "cmd": server.command, "args": list(server.args)})
    elif server.transport == "sse":
        entry.update({"type": "sse", "uri": server.url})
    else:
        entry.update({"type": "streamable_http", "uri": server.url})
    entry["envs"] = dict(server.env)
    entry["timeout"] = DEFAULT_TIMEOUT
    return entry

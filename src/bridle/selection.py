"""Selection filter narrowing a canonical profile before transformation.

Applied in order: kind-level include/exclude, then per-resource picks from
``interactive_selection``, then dropping disabled servers unless a pick names
them explicitly.
"""

from __future__ import annotations

from .harness.config import ResourceKind
from .schemas.options import CopyOptions
from .schemas.profile import CanonicalProfile, CanonicalSettings


def active_kinds(options: CopyOptions) -> list[ResourceKind]:
    """Kinds that survive include/exclude, in processing order."""
    if options.include is not None:
        return [kind for kind in ResourceKind if kind in options.include]
    return [kind for kind in ResourceKind if kind not in options.exclude]


def _picked(options: CopyOptions, kind: ResourceKind, name: str) -> bool | None:
    """True/False when a pick exists for ``kind``; None when the kind has no picks."""
    if options.interactive_selection is None:
        return None
    picks = options.interactive_selection.get(kind)
    if picks is None:
        return None
    return name in picks


def select_resources(profile: CanonicalProfile, options: CopyOptions) -> CanonicalProfile:
    """Return a new profile holding only the resources the options keep."""
    kinds = set(active_kinds(options))

    def keep(kind: ResourceKind, name: str) -> bool:
        return kind in kinds and _picked(options, kind, name) is not False

    servers = []
    if ResourceKind.MCP in kinds:
        for server in profile.mcp_servers:
            picked = _picked(options, ResourceKind.MCP, server.name)
            if picked is False:
                continue
            if not server.enabled:
                if not picked:
                    continue
                server = server.model_copy(update={"enabled": True})
            servers.append(server)

    settings = CanonicalSettings(
        model=profile.settings.model if keep(ResourceKind.SETTINGS, "model") else None,
        theme=profile.settings.theme if keep(ResourceKind.SETTINGS, "theme") else None,
    )

    return CanonicalProfile(
        mcp_servers=servers,
        skills=[s for s in profile.skills if keep(ResourceKind.SKILLS, s.name)],
        agents=[a for a in profile.agents if keep(ResourceKind.AGENTS, a.name)],
        commands=[c for c in profile.commands if keep(ResourceKind.COMMANDS, c.name)],
        settings=settings,
        rejected=[r for r in profile.rejected if keep(r.kind, r.name)],
    )

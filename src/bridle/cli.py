"""CLI entrypoint for bridle."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click
from dotenv import load_dotenv

from .config import settings
from .copier import CopyRequest, copy_profile
from .errors import BridleError, CopyError
from .harness.capabilities import CAPABILITY_MATRIX
from .harness.config import HARNESS_CHOICES, KIND_CHOICES, Harness, ResourceKind
from .profiles import ProfileStore
from .schemas.options import CopyOptions
from .schemas.report import CopyReport

ENV_PATH = Path.cwd() / ".env"
if ENV_PATH.exists():
    load_dotenv(ENV_PATH, override=False)


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else settings.logging.level.upper()
    logging.basicConfig(level=level, format=settings.logging.format)


@click.group()
@click.version_option(package_name="bridle")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.option(
    "--profiles-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Profile storage root (defaults to BRIDLE_PROFILES_DIR).",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, profiles_dir: Path | None) -> None:
    """Manage and copy harness configuration profiles."""
    _configure_logging(verbose)
    ctx.obj = ProfileStore(profiles_dir or settings.profiles_dir)


def _parse_selections(values: tuple[str, ...]) -> dict[ResourceKind, set[str]] | None:
    if not values:
        return None
    selection: dict[ResourceKind, set[str]] = {}
    for value in values:
        kind, sep, name = value.partition(":")
        if not sep or not name or kind not in KIND_CHOICES:
            raise click.BadParameter(
                f"Expected KIND:NAME with KIND in {', '.join(KIND_CHOICES)}; got '{value}'",
                param_hint="--select",
            )
        selection.setdefault(ResourceKind(kind), set()).add(name)
    return selection


def _echo_report(report: CopyReport, as_json: bool) -> None:
    if as_json:
        click.echo(report.model_dump_json(indent=2))
        return
    click.echo(report.render_text())
    for outcome in report.notes():
        click.echo(f"note: {outcome.describe()}")
    for outcome in report.warnings():
        click.echo(f"warning: {outcome.describe()}", err=True)


@main.command("copy")
@click.argument("source_harness", type=click.Choice(HARNESS_CHOICES))
@click.argument("source_profile")
@click.argument("target_harness", type=click.Choice(HARNESS_CHOICES))
@click.argument("target_profile", required=False)
@click.option(
    "--include",
    multiple=True,
    type=click.Choice(KIND_CHOICES),
    help="Only copy these resource kinds (repeatable).",
)
@click.option(
    "--exclude",
    multiple=True,
    type=click.Choice(KIND_CHOICES),
    help="Skip these resource kinds (repeatable).",
)
@click.option(
    "--select",
    "selections",
    multiple=True,
    help="Copy only the named resource of a kind, as KIND:NAME (repeatable).",
)
@click.option("--force", is_flag=True, help="Replace the target profile if it exists.")
@click.option("--dry-run", is_flag=True, help="Report what would happen without writing.")
@click.option("--no-transform", is_flag=True, help="Keep names exactly as in the source.")
@click.option("--json", "as_json", is_flag=True, help="Emit the report as JSON.")
@click.pass_obj
def copy_command(
    store: ProfileStore,
    source_harness: str,
    source_profile: str,
    target_harness: str,
    target_profile: str | None,
    include: tuple[str, ...],
    exclude: tuple[str, ...],
    selections: tuple[str, ...],
    force: bool,
    dry_run: bool,
    no_transform: bool,
    as_json: bool,
) -> None:
    """Copy a profile from one harness into another harness's format."""
    options = CopyOptions(
        include={ResourceKind(kind) for kind in include} if include else None,
        exclude={ResourceKind(kind) for kind in exclude},
        force=force,
        dry_run=dry_run,
        interactive_selection=_parse_selections(selections),
        no_transform=no_transform,
    )
    request = CopyRequest(
        source_harness=Harness(source_harness),
        source_profile=source_profile,
        target_harness=Harness(target_harness),
        target_profile=target_profile,
        options=options,
    )
    try:
        report = copy_profile(request, store=store)
    except CopyError as exc:
        if exc.report is not None:
            _echo_report(exc.report, as_json)
        raise click.ClickException(f"[{exc.code}] {exc.message}") from exc
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc
    _echo_report(report, as_json)


def _active_or_fail(store: ProfileStore, harness: Harness) -> str | None:
    try:
        return store.active_profile(harness)
    except BridleError as exc:
        raise click.ClickException(str(exc)) from exc


@main.group()
def profile() -> None:
    """Stored profile workflows."""


@profile.command("list")
@click.argument("harness", type=click.Choice(HARNESS_CHOICES))
@click.pass_obj
def profile_list(store: ProfileStore, harness: str) -> None:
    """List profiles stored for a harness."""
    names = store.list_profiles(Harness(harness))
    if not names:
        click.echo(f"No profiles for {harness}.")
        return
    active = _active_or_fail(store, Harness(harness))
    for name in names:
        click.echo(f"{name} (active)" if name == active else name)


@profile.command("show")
@click.argument("harness", type=click.Choice(HARNESS_CHOICES))
@click.argument("name")
@click.option("--json", "as_json", is_flag=True, help="Emit JSON output.")
@click.pass_obj
def profile_show(store: ProfileStore, harness: str, name: str, as_json: bool) -> None:
    """Show what a stored profile contains."""
    try:
        info = store.show_profile(Harness(harness), name)
    except (BridleError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc

    if as_json:
        click.echo(info.model_dump_json(indent=2))
        return
    click.echo(f"Profile: {info.harness}/{info.name}")
    click.echo(f"Path: {info.path}")
    click.echo(f"Active: {'yes' if info.active else 'no'}")
    click.echo(f"Model: {info.model or '-'}")
    click.echo(f"Theme: {info.theme or '-'}")
    click.echo(f"MCP servers: {', '.join(info.mcp_servers) or '-'}")
    click.echo(f"Skills: {', '.join(info.skills) or '-'}")
    click.echo(f"Agents: {', '.join(info.agents) or '-'}")
    click.echo(f"Commands: {', '.join(info.commands) or '-'}")


@profile.command("delete")
@click.argument("harness", type=click.Choice(HARNESS_CHOICES))
@click.argument("name")
@click.confirmation_option(prompt="Delete this profile?")
@click.pass_obj
def profile_delete(store: ProfileStore, harness: str, name: str) -> None:
    """Delete a stored profile."""
    try:
        store.delete_profile(Harness(harness), name)
    except (BridleError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Deleted {harness}/{name}")


@profile.command("activate")
@click.argument("harness", type=click.Choice(HARNESS_CHOICES))
@click.argument("name")
@click.pass_obj
def profile_activate(store: ProfileStore, harness: str, name: str) -> None:
    """Mark a stored profile as the active one for a harness."""
    try:
        store.set_active(Harness(harness), name)
    except (BridleError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Active {harness} profile: {name}")


@profile.command("deactivate")
@click.argument("harness", type=click.Choice(HARNESS_CHOICES))
@click.pass_obj
def profile_deactivate(store: ProfileStore, harness: str) -> None:
    """Clear the active profile for a harness."""
    try:
        store.clear_active(Harness(harness))
    except BridleError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"No active {harness} profile")


@profile.command("active")
@click.argument("harness", type=click.Choice(HARNESS_CHOICES))
@click.pass_obj
def profile_active(store: ProfileStore, harness: str) -> None:
    """Print the active profile for a harness."""
    active = _active_or_fail(store, Harness(harness))
    if active is None:
        raise click.ClickException(f"No active profile for {harness}")
    click.echo(active)


@main.group()
def harness() -> None:
    """Harness capability workflows."""


@harness.command("list")
@click.option("--json", "as_json", is_flag=True, help="Emit JSON output.")
def harness_list(as_json: bool) -> None:
    """Show the capability matrix."""
    rows = [
        {
            "harness": descriptor.harness.value,
            "kinds": [kind.value for kind in ResourceKind if descriptor.supports(kind)],
            "naming": {
                kind.value: descriptor.naming_rule(kind).value
                for kind in (ResourceKind.SKILLS, ResourceKind.AGENTS, ResourceKind.COMMANDS)
                if descriptor.supports(kind)
            },
            "model_selection": descriptor.model_selection,
        }
        for descriptor in CAPABILITY_MATRIX.values()
    ]
    if as_json:
        click.echo(json.dumps(rows, indent=2))
        return
    for row in rows:
        naming = ", ".join(f"{kind}={rule}" for kind, rule in row["naming"].items())
        click.echo(
            f"{row['harness']}: kinds={','.join(row['kinds'])} | naming: {naming or '-'} | "
            f"model_selection={row['model_selection']}"
        )

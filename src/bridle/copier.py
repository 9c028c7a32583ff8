"""Cross-harness profile copy orchestration.

Stages, strictly ordered: resolve identities, extract the source, filter,
transform per resource against the target's capabilities, then (unless dry
run) stage into a sibling directory and swap it into place. Nothing touches
the target before the swap.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from . import staging
from .config import settings
from .errors import (
    CommitFailed,
    CopyError,
    IncompleteCommitDetected,
    InvalidProfileFile,
    NothingToCopy,
    ProfileNotFound,
    SourceInvalid,
    SourceNotFound,
    StageWriteFailed,
    TargetAlreadyExists,
    TargetHarnessUnsupported,
    WriteError,
)
from .harness.adapters.base import ProfileAdapter
from .harness.adapters.registry import AdapterRegistry, registry
from .harness.capabilities import CAPABILITY_MATRIX, CapabilityDescriptor
from .harness.config import Harness, ResourceKind
from .profiles import ProfileStore
from .schemas.options import CopyOptions
from .schemas.profile import CanonicalProfile, CanonicalSettings
from .schemas.report import (
    INVALID_IN_SOURCE,
    UNSUPPORTED_BY_TARGET,
    CopyReport,
    FatalError,
    TransformOutcome,
)
from .selection import select_resources
from .transform import TransformContext, transform_resource

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CopyRequest:
    """Input bundle for one cross-harness copy."""

    source_harness: Harness
    source_profile: str
    target_harness: Harness
    target_profile: str | None = None
    options: CopyOptions = field(default_factory=CopyOptions)

    @property
    def resolved_target_profile(self) -> str:
        return self.target_profile or self.source_profile

    @property
    def source_label(self) -> str:
        return f"{self.source_harness.value}/{self.source_profile}"

    @property
    def target_label(self) -> str:
        return f"{self.target_harness.value}/{self.resolved_target_profile}"


@dataclass(frozen=True, slots=True)
class ResolvedCopy:
    """Adapters, capabilities and paths for a request."""

    source_adapter: ProfileAdapter
    target_adapter: ProfileAdapter
    capabilities: CapabilityDescriptor
    source_dir: Path
    target_dir: Path
    recover: bool = False


def _fail(error: CopyError, report: CopyReport | None) -> CopyError:
    if report is not None:
        report.fatal_error = FatalError(code=error.code, message=error.message)
        error.report = report
    return error


def _resolve(request: CopyRequest, store: ProfileStore, adapters: AdapterRegistry) -> ResolvedCopy:
    target = request.target_harness
    if target not in CAPABILITY_MATRIX or not adapters.has(target):
        raise TargetHarnessUnsupported(
            f"Target harness '{target.value}' is unsupported or has no format adapter"
        )
    if not adapters.has(request.source_harness):
        raise SourceNotFound(
            f"No format adapter for source harness '{request.source_harness.value}'"
        )

    source_dir = store.profile_path(request.source_harness, request.source_profile)
    if not source_dir.is_dir():
        raise SourceNotFound(f"Source profile {request.source_label} not found at {source_dir}")

    target_dir = store.profile_path(target, request.resolved_target_profile)
    force = request.options.force
    recover = staging.has_incomplete_commit(target_dir)
    if recover and not force:
        raise IncompleteCommitDetected(
            f"Target profile {request.target_label} has an unfinished commit "
            f"({staging.journal_path(target_dir)}); inspect it or re-run with force"
        )
    if target_dir.exists() and not force:
        raise TargetAlreadyExists(
            f"Target profile {request.target_label} already exists; use force to replace it"
        )

    return ResolvedCopy(
        source_adapter=adapters.resolve(request.source_harness),
        target_adapter=adapters.resolve(target),
        capabilities=CAPABILITY_MATRIX[target],
        source_dir=source_dir,
        target_dir=target_dir,
        recover=recover,
    )


def _kind_items(profile: CanonicalProfile) -> list[tuple[ResourceKind, list[Any]]]:
    items: list[tuple[ResourceKind, list[Any]]] = list(profile.collections().items())
    items.append((ResourceKind.SETTINGS, profile.settings.items()))
    return items


def _item_name(kind: ResourceKind, item: Any) -> str:
    return item[0] if kind is ResourceKind.SETTINGS else item.name


def transform_profile(
    profile: CanonicalProfile,
    source: Harness,
    capabilities: CapabilityDescriptor,
    report: CopyReport,
    *,
    no_transform: bool = False,
) -> CanonicalProfile:
    """Run every resource through capability lookup and its strategy.

    Outcomes are recorded on ``report``; the returned profile holds what to stage.
    """
    context = TransformContext(source=source, target=capabilities, no_transform=no_transform)
    staged: dict[ResourceKind, list[Any]] = {kind: [] for kind in ResourceKind}

    for kind, items in _kind_items(profile):
        for item in items:
            if not capabilities.supports(kind):
                name = _item_name(kind, item)
                report.record(TransformOutcome.skipped(kind, name, UNSUPPORTED_BY_TARGET))
                continue
            result = transform_resource(kind, item, context)
            report.record(result.outcome)
            if result.outcome.status == "warned":
                logger.warning("%s", result.outcome.describe())
            if result.resource is not None:
                staged[kind].append(result.resource)
        for rejected in profile.rejected:
            if rejected.kind is kind:
                reason = f"{INVALID_IN_SOURCE}: {rejected.reason}"
                report.record(TransformOutcome.skipped(kind, rejected.name, reason))

    return CanonicalProfile(
        mcp_servers=staged[ResourceKind.MCP],
        skills=staged[ResourceKind.SKILLS],
        agents=staged[ResourceKind.AGENTS],
        commands=staged[ResourceKind.COMMANDS],
        settings=CanonicalSettings(**dict(staged[ResourceKind.SETTINGS])),
    )


def _stage_and_commit(
    request: CopyRequest, resolved: ResolvedCopy, staged: CanonicalProfile, report: CopyReport
) -> None:
    staging_dir: Path | None = None
    try:
        staging_dir = staging.create_staging_dir(resolved.target_dir)
        logger.debug("Staging %s into %s", request.target_label, staging_dir)
        resolved.target_adapter.write(staging_dir, staged)
    except (WriteError, OSError) as exc:
        if staging_dir is not None:
            staging.discard(staging_dir)
        raise _fail(
            StageWriteFailed(f"Staging {request.target_label} failed: {exc}"), report
        ) from exc

    if resolved.recover:
        try:
            staging.recover_incomplete_commit(resolved.target_dir, keep=staging_dir)
        except OSError as exc:
            staging.discard(staging_dir)
            raise _fail(
                IncompleteCommitDetected(
                    f"Recovering the unfinished commit into {resolved.target_dir} failed: {exc}"
                ),
                report,
            ) from exc

    try:
        staging.commit(staging_dir, resolved.target_dir)
    except OSError as exc:
        raise _fail(
            CommitFailed(
                f"Commit into {resolved.target_dir} failed: {exc}; "
                f"see {staging.journal_path(resolved.target_dir)} before retrying"
            ),
            report,
        ) from exc


def copy_profile(
    request: CopyRequest,
    *,
    store: ProfileStore | None = None,
    adapters: AdapterRegistry = registry,
) -> CopyReport:
    """Copy a profile from one harness to another and report per-resource outcomes.

    Raises a ``CopyError`` subclass on any whole-operation failure; the target
    is left untouched unless the error is ``CommitFailed``. A leftover commit
    journal on the target is only cleaned up right before a forced commit, so
    dry runs and failed copies never touch it.
    """
    store = store or ProfileStore(settings.profiles_dir, adapters)
    options = request.options
    logger.info("Copying %s -> %s", request.source_label, request.target_label)

    resolved = _resolve(request, store, adapters)

    try:
        profile = resolved.source_adapter.extract(resolved.source_dir)
    except ProfileNotFound as exc:
        raise SourceNotFound(f"Source profile {request.source_label} not found: {exc}") from exc
    except InvalidProfileFile as exc:
        raise SourceInvalid(f"Source profile {request.source_label} is invalid: {exc}") from exc

    selected = select_resources(profile, options)
    if selected.is_empty():
        raise NothingToCopy(f"Nothing to copy from {request.source_label} after filtering")

    report = CopyReport(
        source_harness=request.source_harness.value,
        source_profile=request.source_profile,
        target_harness=request.target_harness.value,
        target_profile=request.resolved_target_profile,
        dry_run=options.dry_run,
    )
    staged = transform_profile(
        selected,
        request.source_harness,
        resolved.capabilities,
        report,
        no_transform=options.no_transform,
    )

    if options.dry_run:
        logger.info("Dry run; %s not written", request.target_label)
        return report

    _stage_and_commit(request, resolved, staged, report)
    report.committed = True
    logger.info("Committed %s", request.target_label)
    return report

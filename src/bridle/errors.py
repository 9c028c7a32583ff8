"""Error types raised by bridle.

Adapter errors (``ProfileNotFound``, ``WriteError``, ``InvalidProfileFile``)
describe a single I/O boundary. ``CopyError`` subclasses are the whole-operation fatal conditions of
a cross-harness copy; per-resource problems never become exceptions and are
reported as Skipped/Warned outcomes instead.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - import cycles avoided at runtime
    from .schemas.report import CopyReport


class BridleError(Exception):
    """Base class for all bridle errors."""


class ProfileNotFound(BridleError):
    """A profile location does not exist for the given harness."""


class ProfileExists(BridleError):
    """A profile location already exists."""


class WriteError(BridleError):
    """A format adapter failed to write harness-native files."""


class InvalidProfileFile(BridleError):
    """A harness-native file exists but cannot be parsed."""

    def __init__(self, path: Path, detail: str) -> None:
        super().__init__(f"Cannot parse {path}: {detail}")
        self.path = path


class CopyError(BridleError):
    """Fatal condition that aborts a copy without mutating the target."""

    code = "copy_failed"

    def __init__(self, message: str, *, report: CopyReport | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.report = report


class SourceNotFound(CopyError):
    code = "source_not_found"


class SourceInvalid(CopyError):
    """A source profile file could not be parsed."""

    code = "source_invalid"


class TargetAlreadyExists(CopyError):
    code = "target_already_exists"


class TargetHarnessUnsupported(CopyError):
    code = "target_harness_unsupported"


class NothingToCopy(CopyError):
    code = "nothing_to_copy"


class StageWriteFailed(CopyError):
    code = "stage_write_failed"


class CommitFailed(CopyError):
    """The swap into the target failed; on-disk state needs inspection."""

    code = "commit_failed"


class IncompleteCommitDetected(CommitFailed):
    """A previous commit into the target never finished."""

    code = "incomplete_commit"

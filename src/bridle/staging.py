"""Stage-then-swap commits into a profile directory.

Staging directories live beside the target so the final swap is a pair of
same-filesystem renames. A journal file marks the swap window; if the process
dies inside it, the journal stays behind and later copies refuse the target
until forced.

The swap is two renames, not one: between them the target path does not
exist, so a reader racing the commit can find it missing. It never sees a
partially written profile.
"""

from __future__ import annotations

import json
import logging
import os
import re
import shutil
import tempfile
import uuid
from pathlib import Path

from .config import StagingSettings, settings

logger = logging.getLogger(__name__)

# mkdtemp and uuid4().hex[:8] both produce 8-character suffixes
_SUFFIX = r"-[A-Za-z0-9_]{8}"


def journal_path(target: Path, staging: StagingSettings | None = None) -> Path:
    staging = staging or settings.staging
    return target.parent / f".{target.name}{staging.journal_suffix}"


def has_incomplete_commit(target: Path, staging: StagingSettings | None = None) -> bool:
    return journal_path(target, staging).is_file()


def write_text_atomic(path: Path, text: str) -> None:
    """Write ``text`` to ``path`` through a sibling temp file and a rename."""
    fd, tmp_name = tempfile.mkstemp(prefix=f"{path.name}.", suffix=".tmp", dir=path.parent)
    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp, path)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise


def create_staging_dir(target: Path, staging: StagingSettings | None = None) -> Path:
    """Create an empty staging directory next to ``target``."""
    staging = staging or settings.staging
    target.parent.mkdir(parents=True, exist_ok=True)
    return Path(tempfile.mkdtemp(prefix=f"{staging.prefix}{target.name}-", dir=target.parent))


def discard(path: Path) -> None:
    shutil.rmtree(path, ignore_errors=True)


def _leftovers(target: Path, prefix: str) -> list[Path]:
    pattern = re.compile(re.escape(f"{prefix}{target.name}") + _SUFFIX)
    return sorted(
        (p for p in target.parent.iterdir() if pattern.fullmatch(p.name) and p.is_dir()),
        key=lambda p: p.stat().st_mtime,
    )


def _read_journal(journal: Path) -> tuple[list[Path], list[Path]] | None:
    """Backup and staging paths recorded in ``journal``; None when unreadable."""
    try:
        record = json.loads(journal.read_text(encoding="utf-8"))
        return [Path(record["backup"])], [Path(record["staging"])]
    except (ValueError, KeyError, TypeError) as exc:
        logger.warning(
            "Commit journal %s is unreadable (%s); scanning for leftovers", journal, exc
        )
        return None


def recover_incomplete_commit(
    target: Path, staging: StagingSettings | None = None, *, keep: Path | None = None
) -> None:
    """Clean up after an interrupted commit.

    Restores the previous target when the swap died between its two renames,
    removes leftover staging/backup directories and the journal. A damaged
    journal falls back to scanning the target's siblings by prefix; ``keep``
    names a staging directory that must survive the scan.
    """
    staging = staging or settings.staging
    journal = journal_path(target, staging)
    if not journal.is_file():
        return
    recorded = _read_journal(journal)
    if recorded is None:
        backups = _leftovers(target, staging.backup_prefix)
        stages = _leftovers(target, staging.prefix)
    else:
        backups, stages = recorded
    stages = [stage for stage in stages if stage != keep]

    if not target.exists():
        restorable = [backup for backup in backups if backup.is_dir()]
        if restorable:
            logger.warning(
                "Restoring %s from interrupted commit backup %s", target, restorable[-1]
            )
            os.replace(restorable[-1], target)
    for leftover in [*backups, *stages]:
        discard(leftover)
    for tmp in target.parent.glob(f"{journal.name}.*.tmp"):
        tmp.unlink(missing_ok=True)
    journal.unlink()


def commit(staged: Path, target: Path, staging: StagingSettings | None = None) -> None:
    """Swap ``staged`` into place as ``target``.

    Raises OSError on failure, leaving the journal in place.
    """
    staging = staging or settings.staging
    journal = journal_path(target, staging)
    backup = target.parent / f"{staging.backup_prefix}{target.name}-{uuid.uuid4().hex[:8]}"
    write_text_atomic(
        journal,
        json.dumps(
            {"target": str(target), "staging": str(staged), "backup": str(backup)},
            indent=2,
        ),
    )

    if target.exists():
        os.replace(target, backup)
    os.replace(staged, target)
    discard(backup)
    journal.unlink()
    logger.debug("Committed %s", target)

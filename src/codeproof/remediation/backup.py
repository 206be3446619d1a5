"""Keep an untouched copy of every file before its first rewrite in a run."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from codeproof.exceptions import BackupFailure
from codeproof.model import BackupRecord
from codeproof.remediation.context import RemediationContext
from codeproof.utils import display_path

logger = logging.getLogger(__name__)


def backup_location(backup_root: Path, root: Path, path: Path) -> Path:
    """Return the mirrored backup path for ``path`` under ``backup_root``."""
    try:
        relative = path.relative_to(root)
    except ValueError as exc:
        raise BackupFailure(f"{path} is outside the repository root {root}") from exc
    return backup_root / relative


def _free_location(target: Path) -> Path:
    """Return ``target`` or, when a previous run left a copy there, the first free ``<name>.<n>``."""
    if not target.exists():
        return target
    index = 1
    while True:
        candidate = target.with_name(f"{target.name}.{index}")
        if not candidate.exists():
            return candidate
        index += 1


def backup_file_once(path: Path, context: RemediationContext) -> BackupRecord | None:
    """Copy ``path`` to the backup root unless this run already did.

    Returns the new record, or None when the file was already protected.
    Backups from earlier runs are never overwritten.
    """
    if path in context.backed_up:
        return None

    target = backup_location(context.backup_root, context.root, path)
    destination = _free_location(target)
    if destination != target:
        logger.warning(
            "Backup from a previous run exists at %s; keeping it and writing %s",
            display_path(target, context.root),
            display_path(destination, context.root),
        )

    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(path, destination)
    except OSError as exc:
        raise BackupFailure(f"backup failed: {exc}") from exc

    record = BackupRecord(source=path, backup=destination)
    context.backed_up.add(path)
    context.backups.append(record)
    logger.debug("Backed up %s to %s", path, destination)
    return record

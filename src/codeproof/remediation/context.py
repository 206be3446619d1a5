"""Run-scoped state shared by every remediation stage."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from codeproof.model import BackupRecord, EnvEntry, RemediationResult
from codeproof.remediation.env_store import KeyAllocator


@dataclass
class RemediationContext:
    """Mutable state threaded through one sequential remediation run.

    ``backed_up`` guarantees at most one backup per file per run, and
    ``keys`` guarantees env keys never repeat within the store or the run.
    """

    root: Path
    backup_root: Path
    keys: KeyAllocator
    backed_up: set[Path] = field(default_factory=set)
    backups: list[BackupRecord] = field(default_factory=list)
    entries: list[EnvEntry] = field(default_factory=list)
    modified_files: list[Path] = field(default_factory=list)
    results: list[RemediationResult] = field(default_factory=list)

    def record_move(self, path: Path, entry: EnvEntry, location: str) -> None:
        """Commit a successful rewrite: claim its key and queue the entry."""
        self.keys.claim(entry.key)
        self.entries.append(entry)
        if path not in self.modified_files:
            self.modified_files.append(path)
        self.results.append(RemediationResult(kind="moved", location=location, env_key=entry.key))

    def record_error(self, location: str, reason: str) -> None:
        """Record a failure without interrupting the run."""
        self.results.append(RemediationResult(kind="error", location=location, reason=reason))

    @property
    def moved_count(self) -> int:
        """Number of secrets moved so far."""
        return len(self.entries)

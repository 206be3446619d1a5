"""Per-finding remediation failures.

These are raised by the individual pipeline stages and collected by the
orchestrator as ``error`` results; they never abort a run.
"""

from __future__ import annotations

from codeproof.exceptions.base import CodeproofError


class RemediationError(CodeproofError):
    """Base class for failures scoped to a single finding or the env store."""


class FileReadError(RemediationError):
    """Raised when a source file cannot be read or decoded."""


class FileWriteError(RemediationError):
    """Raised when a rewritten file cannot be written back."""


class ExtractionFailure(RemediationError):
    """Raised when no secret literal can be isolated from a source line."""


class BackupFailure(RemediationError):
    """Raised when a file could not be copied to the backup root."""


class StaleLine(RemediationError):
    """Raised when the current line no longer matches the recorded finding."""


class EnvWriteFailure(RemediationError):
    """Raised when new entries could not be appended to the env store."""

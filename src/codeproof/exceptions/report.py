"""Scan report loading exceptions."""

from __future__ import annotations

from codeproof.exceptions.base import CodeproofError


class ReportError(CodeproofError):
    """Base class for report loading failures."""


class ReportMissing(ReportError):
    """Raised when no scan report exists for the repository."""


class ReportMalformed(ReportError, ValueError):
    """Raised when a report document does not have the expected shape."""

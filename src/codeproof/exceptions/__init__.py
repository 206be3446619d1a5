"""Shared exception hierarchy for Codeproof."""

from __future__ import annotations

from .base import CodeproofError
from .config import ConfigError
from .remediation import (
    BackupFailure,
    EnvWriteFailure,
    ExtractionFailure,
    FileReadError,
    FileWriteError,
    RemediationError,
    StaleLine,
)
from .report import ReportError, ReportMalformed, ReportMissing

__all__ = [
    "BackupFailure",
    "CodeproofError",
    "ConfigError",
    "EnvWriteFailure",
    "ExtractionFailure",
    "FileReadError",
    "FileWriteError",
    "RemediationError",
    "ReportError",
    "ReportMalformed",
    "ReportMissing",
    "StaleLine",
]

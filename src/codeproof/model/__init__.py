"""Core data models for Codeproof."""

from .entities import (
    BackupRecord,
    EligibleFinding,
    EnvEntry,
    Finding,
    Rejection,
    RemediationResult,
    RemediationSummary,
    Report,
)

__all__ = [
    "BackupRecord",
    "EligibleFinding",
    "EnvEntry",
    "Finding",
    "Rejection",
    "RemediationResult",
    "RemediationSummary",
    "Report",
]

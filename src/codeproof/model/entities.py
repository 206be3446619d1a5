"""Immutable data structures for reports, findings and remediation results."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from codeproof.exceptions import ReportMalformed
from codeproof.types import JsonObject, JsonScalar, ResultKind, RunStatus


def _optional_str(raw: Mapping[str, object], key: str, index: int) -> str | None:
    value = raw.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ReportMalformed(f"findings[{index}].{key} must be a string, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class Finding:
    """A single detected issue as recorded by the external scanner."""

    rule_id: str | None
    severity: str | None
    file_path: str | None
    line_number: int | None
    code_snippet: str | None
    finding_id: str | None = None
    confidence: JsonScalar = None
    explanation: str | None = None

    @property
    def location(self) -> str:
        """Render ``file:line`` for diagnostics."""
        path = self.file_path or "<unknown>"
        if self.line_number is None:
            return path
        return f"{path}:{self.line_number}"

    @classmethod
    def from_dict(cls, raw: object, index: int) -> Finding:
        """Validate one report entry, raising ``ReportMalformed`` on wrong field types."""
        if not isinstance(raw, Mapping):
            raise ReportMalformed(f"findings[{index}] must be an object, got {type(raw).__name__}")

        line_number = raw.get("lineNumber")
        if line_number is not None and (
            isinstance(line_number, bool) or not isinstance(line_number, int) or line_number < 1
        ):
            raise ReportMalformed(f"findings[{index}].lineNumber must be a positive integer, got {line_number!r}")

        finding_id = raw.get("findingId")
        if finding_id is not None and (isinstance(finding_id, bool) or not isinstance(finding_id, (str, int))):
            raise ReportMalformed(f"findings[{index}].findingId must be a string or integer")

        confidence = raw.get("confidence")
        if confidence is not None and not isinstance(confidence, (str, int, float, bool)):
            raise ReportMalformed(f"findings[{index}].confidence must be a scalar value")

        return cls(
            finding_id=None if finding_id is None else str(finding_id),
            rule_id=_optional_str(raw, "ruleId", index),
            severity=_optional_str(raw, "severity", index),
            confidence=confidence,
            file_path=_optional_str(raw, "filePath", index),
            line_number=line_number,
            code_snippet=_optional_str(raw, "codeSnippet", index),
            explanation=_optional_str(raw, "explanation", index),
        )


@dataclass(frozen=True)
class Report:
    """A loaded scan report."""

    path: Path
    findings: tuple[Finding, ...]
    metadata: JsonObject = field(default_factory=dict)


@dataclass(frozen=True)
class EligibleFinding:
    """A finding that passed every automated-remediation predicate."""

    finding: Finding
    absolute_path: Path

    @property
    def line_number(self) -> int:
        """1-based target line, guaranteed present for eligible findings."""
        assert self.finding.line_number is not None
        return self.finding.line_number

    @property
    def code_snippet(self) -> str:
        """Snippet captured at detection time, guaranteed present."""
        assert self.finding.code_snippet is not None
        return self.finding.code_snippet


@dataclass(frozen=True)
class Rejection:
    """A finding that failed an eligibility predicate."""

    finding: Finding
    reason: str


@dataclass(frozen=True)
class BackupRecord:
    """Association of a source file with its backup copy."""

    source: Path
    backup: Path


@dataclass(frozen=True)
class EnvEntry:
    """A newly externalized secret."""

    key: str
    value: str

    def __repr__(self) -> str:
        return f"EnvEntry(key={self.key!r}, value=<redacted>)"


@dataclass(frozen=True)
class RemediationResult:
    """Per-finding outcome."""

    kind: ResultKind
    location: str
    reason: str = ""
    env_key: str | None = None

    def format(self) -> str:
        """Format as a single-line ``location - reason`` message."""
        if self.reason:
            return f"{self.location} - {self.reason}"
        return self.location


@dataclass(frozen=True)
class RemediationSummary:
    """Final audit summary for one run."""

    status: RunStatus
    processed: int = 0
    moved: int = 0
    files_modified: tuple[Path, ...] = ()
    backup_root: Path | None = None
    env_path: Path | None = None
    backups: tuple[BackupRecord, ...] = ()
    results: tuple[RemediationResult, ...] = ()
    report_path: Path | None = None

    @property
    def errors(self) -> tuple[RemediationResult, ...]:
        """Results with kind ``error``."""
        return tuple(result for result in self.results if result.kind == "error")

    @property
    def skipped(self) -> tuple[RemediationResult, ...]:
        """Results with kind ``skipped``."""
        return tuple(result for result in self.results if result.kind == "skipped")

    @property
    def has_errors(self) -> bool:
        """Whether any per-item or persistence error occurred."""
        return bool(self.errors)

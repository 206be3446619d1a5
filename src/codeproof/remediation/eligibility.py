"""Select findings that are safe candidates for automated remediation."""

from __future__ import annotations

import logging
from collections.abc import Collection, Sequence
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from codeproof.constants.remediation import REMEDIABLE_SEVERITIES, SECRET_RULE_PREFIX, TEST_PATH_HINTS
from codeproof.model import EligibleFinding, Finding, Rejection
from codeproof.utils import is_within, resolve_under_root

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EligibilityResult:
    """Partition of report findings, each side in report order."""

    eligible: tuple[EligibleFinding, ...]
    rejected: tuple[Rejection, ...]

    @property
    def skipped_secrets(self) -> tuple[Rejection, ...]:
        """Rejections of secret findings, i.e. excluding other rule namespaces."""
        return tuple(rejection for rejection in self.rejected if is_secret_rule(rejection.finding))


def is_secret_rule(finding: Finding) -> bool:
    """Whether the finding belongs to the secret-detection rule namespace."""
    return finding.rule_id is not None and finding.rule_id.startswith(SECRET_RULE_PREFIX)


def is_test_like(path: Path) -> bool:
    """Return True when any path segment names a test, example or mock location."""
    return any(part.lower() in TEST_PATH_HINTS for part in path.parts)


def is_excluded(path: Path, root: Path, excluded_dirs: Sequence[str]) -> bool:
    """Return True when ``path`` falls under an excluded directory.

    Plain names (``node_modules``) match any segment below the root; entries
    containing a slash (``vendor/lib``) match as root-relative prefixes.
    """
    try:
        relative_parts = tuple(part.lower() for part in path.relative_to(root).parts)
    except ValueError:
        relative_parts = tuple(part.lower() for part in path.parts)

    for entry in excluded_dirs:
        entry_parts = PurePosixPath(entry.lower()).parts
        if len(entry_parts) == 1:
            if entry_parts[0] in relative_parts:
                return True
        elif relative_parts[: len(entry_parts)] == entry_parts:
            return True
    return False


def rejection_reason(
    finding: Finding,
    *,
    root: Path,
    excluded_dirs: Sequence[str],
    protected_paths: Collection[Path] = (),
) -> str | None:
    """Return why a finding is not eligible, or None when every predicate passes."""
    if not is_secret_rule(finding):
        return f"not a secret rule ({finding.rule_id})"
    if finding.severity not in REMEDIABLE_SEVERITIES:
        return f"severity {finding.severity} is below the remediation threshold"
    if not finding.file_path or finding.line_number is None:
        return "missing file path or line number"
    if not finding.code_snippet or not finding.code_snippet.strip():
        return "missing code snippet"

    absolute = resolve_under_root(finding.file_path, root)
    if is_test_like(absolute):
        return "test, example or mock path"
    if is_excluded(absolute, root, excluded_dirs):
        return "excluded directory"
    if not is_within(absolute, root):
        return "outside the repository root"
    if absolute in protected_paths:
        return "file is managed by codeproof"
    return None


def filter_eligible(
    findings: Sequence[Finding],
    *,
    root: Path,
    excluded_dirs: Sequence[str],
    protected_paths: Collection[Path] = (),
) -> EligibilityResult:
    """Split findings into eligible ones and rejections with reasons."""
    root = root.resolve()
    eligible: list[EligibleFinding] = []
    rejected: list[Rejection] = []

    for finding in findings:
        reason = rejection_reason(finding, root=root, excluded_dirs=excluded_dirs, protected_paths=protected_paths)
        if reason is not None:
            logger.debug("Filtered %s: %s", finding.location, reason)
            rejected.append(Rejection(finding=finding, reason=reason))
            continue
        assert finding.file_path is not None
        eligible.append(EligibleFinding(finding=finding, absolute_path=resolve_under_root(finding.file_path, root)))

    return EligibilityResult(eligible=tuple(eligible), rejected=tuple(rejected))

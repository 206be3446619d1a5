"""Human-readable stdout summary for remediation runs."""

from __future__ import annotations

from pathlib import Path

from codeproof.constants.branding import SUMMARY_TITLE
from codeproof.constants.reporting import ANSI_RESET, RESULT_KIND_COLORS, SUMMARY_RULE
from codeproof.model import RemediationResult, RemediationSummary
from codeproof.utils import display_path


def _colorize(text: str, color: str) -> str:
    return f"{color}{text}{ANSI_RESET}"


class SummaryReporter:
    """Formats a ``RemediationSummary`` for the terminal."""

    def __init__(
        self,
        summary: RemediationSummary,
        *,
        root: Path,
        color: bool = True,
        verbose: bool = False,
    ) -> None:
        """Initialise the reporter."""
        self._summary = summary
        self._root = root
        self._color = color
        self._verbose = verbose

    def render(self) -> str:
        """Render the summary; early exits only list skipped findings in verbose mode."""
        if self._summary.status != "completed":
            return self._render_items("Skipped", self._summary.skipped) if self._verbose else ""

        s = self._summary
        lines = [
            "",
            SUMMARY_RULE,
            SUMMARY_TITLE,
            SUMMARY_RULE,
            f"Secrets processed: {s.processed}",
            f"Secrets moved: {self._paint(str(s.moved), 'moved')}",
            f"Files modified: {len(s.files_modified)}",
        ]
        if s.backup_root is not None:
            lines.append(f"Backup location: {display_path(s.backup_root, self._root)}")
        if s.env_path is not None:
            lines.append(f"Env file: {display_path(s.env_path, self._root)}")

        if s.errors:
            lines.append("")
            lines.append(self._render_items("Errors", s.errors))
        if s.skipped:
            lines.append("")
            lines.append(self._render_items("Skipped", s.skipped))

        lines.append(SUMMARY_RULE)
        return "\n".join(lines)

    def _render_items(self, title: str, results: tuple[RemediationResult, ...]) -> str:
        if not results:
            return ""
        kind = results[0].kind
        lines = [self._paint(f"{title} ({len(results)}):", kind)]
        lines.extend(f"  - {result.format()}" for result in results)
        return "\n".join(lines)

    def _paint(self, text: str, kind: str) -> str:
        color = RESULT_KIND_COLORS.get(kind, "")
        return _colorize(text, color) if self._color and color else text

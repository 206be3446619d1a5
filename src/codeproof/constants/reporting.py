"""Constants for terminal summary rendering."""

from __future__ import annotations

ANSI_RED: str = "\033[31m"
ANSI_YELLOW: str = "\033[33m"
ANSI_GREEN: str = "\033[32m"
ANSI_RESET: str = "\033[0m"

SUMMARY_RULE: str = "═" * 43

RESULT_KIND_COLORS: dict[str, str] = {
    "moved": ANSI_GREEN,
    "skipped": ANSI_YELLOW,
    "error": ANSI_RED,
}

"""Branding constants for terminal output."""

from __future__ import annotations

BRAND_NAME: str = "CODEPROOF"
ASCII_LOGO_LINES: tuple[str, ...] = (
    ">_ CODEPROOF",
    "     // hard-coded secret remediation",
)
SUMMARY_TITLE: str = "Secret Move Summary"
CLI_DESCRIPTION: str = "\n".join((*ASCII_LOGO_LINES, "", f"{BRAND_NAME} command line"))

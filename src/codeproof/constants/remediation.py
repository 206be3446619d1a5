"""Constants for secret eligibility, extraction and env store handling."""

from __future__ import annotations

import re

SECRET_RULE_PREFIX: str = "secret."
REMEDIABLE_SEVERITIES: frozenset[str] = frozenset({"block", "high"})

TEST_PATH_HINTS: frozenset[str] = frozenset(
    {
        "test",
        "tests",
        "__tests__",
        "spec",
        "example",
        "examples",
        "sample",
        "samples",
        "mock",
        "mocks",
    }
)

# Key token, assignment operator (never ``==``), then a quoted or bare literal.
ASSIGNMENT_PATTERN: re.Pattern[str] = re.compile(
    r"""(?P<key>["'`]?[A-Za-z_$][\w$.\-]*["'`]?)"""
    r"""\s*(?P<op>:=|=>|=(?!=)|:)\s*"""
    r"""(?P<value>"[^"]*"|'[^']*'|`[^`]*`|[^\s,;"'`(){}\[\]]+)"""
)
SECRET_QUOTE_CHARS: str = "\"'`"
# An assignment operator directly after a bare value means the value was a type or key.
ASSIGNMENT_OPERATOR_AHEAD: re.Pattern[str] = re.compile(r"\s*(?::=|=>|=(?!=)|:)")
# Scanners mask recorded secrets with runs of asterisks.
MASKED_VALUE_PATTERN: re.Pattern[str] = re.compile(r"\*{3,}")

ENV_LINE_PATTERN: re.Pattern[str] = re.compile(r"^\s*(?:export\s+)?(?P<key>[A-Za-z_][A-Za-z0-9_]*)\s*=")
ENV_KEY_NAME_PATTERN: re.Pattern[str] = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
ENV_VALUE_NEEDS_QUOTES: re.Pattern[str] = re.compile(r"""[\s#"'\\]""")
ENV_VALUE_ESCAPE_PATTERN: re.Pattern[str] = re.compile(r"\\(.)")

ATOMIC_TEMP_PREFIX: str = ".codeproof-"
ATOMIC_TEMP_SUFFIX: str = ".tmp"

CONFIRM_QUESTION: str = "Proceed with moving these secrets? (y/N): "
CONFIRM_ANSWER: str = "y"

ENV_WRITE_LOCATION: str = "env-write"

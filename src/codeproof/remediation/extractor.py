"""Isolate a literal secret value from one raw source line.

Only single-line ``key = value`` style assignments are recognized. When a
line chains several assignment operators (``const key: string = "..."``),
the last quoted literal wins; without a quoted literal the first bare value
that is not itself followed by another operator is used. No language
syntax is parsed.

>>> extract_secret_value('const API_KEY = "sk-12345";')
'sk-12345'
>>> extract_secret_value('const apiKey: string = "sk-live-abc";')
'sk-live-abc'
>>> extract_secret_value("password: hunter2")
'hunter2'
>>> extract_secret_value("print(token)") is None
True
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass

from codeproof.constants.remediation import ASSIGNMENT_OPERATOR_AHEAD, ASSIGNMENT_PATTERN, SECRET_QUOTE_CHARS


@dataclass(frozen=True)
class SecretLiteral:
    """Extracted secret value and the span of its literal in the line.

    ``start:end`` covers the literal including its quote characters, so
    replacing that span swaps the whole string literal.
    """

    value: str
    start: int
    end: int


def _is_quoted(match: re.Match[str]) -> bool:
    return match.group("value")[0] in SECRET_QUOTE_CHARS


def _assignments(line: str) -> Iterator[re.Match[str]]:
    """Yield assignment matches left to right.

    A bare value may be the key of a following assignment, so the next search
    restarts at its first character; quoted literals are skipped whole.
    """
    position = 0
    while True:
        match = ASSIGNMENT_PATTERN.search(line, position)
        if match is None:
            return
        yield match
        position = match.end("value") if _is_quoted(match) else match.start("value")


def _select(line: str, matches: list[re.Match[str]]) -> re.Match[str] | None:
    quoted = [match for match in matches if _is_quoted(match)]
    if quoted:
        return quoted[-1]
    for match in matches:
        if ASSIGNMENT_OPERATOR_AHEAD.match(line, match.end("value")) is None:
            return match
    return None


def locate_secret(line: str) -> SecretLiteral | None:
    """Return the assigned secret literal on ``line``, or None."""
    match = _select(line, list(_assignments(line)))
    if match is None:
        return None
    value = match.group("value").strip().strip(SECRET_QUOTE_CHARS).strip()
    if not value:
        return None
    return SecretLiteral(value=value, start=match.start("value"), end=match.end("value"))


def extract_secret_value(line: str) -> str | None:
    """Return the stripped secret value from ``line``, or None when absent or empty."""
    literal = locate_secret(line)
    return literal.value if literal is not None else None

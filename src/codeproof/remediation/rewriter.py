"""Verified, line-scoped substitution of a secret literal with a reference."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from codeproof.constants.config import DEFAULT_REFERENCE_TEMPLATE, REFERENCE_KEY_PLACEHOLDER
from codeproof.constants.remediation import ATOMIC_TEMP_PREFIX, ATOMIC_TEMP_SUFFIX, MASKED_VALUE_PATTERN
from codeproof.exceptions import ExtractionFailure, FileReadError, FileWriteError, StaleLine
from codeproof.io import write_bytes_atomic
from codeproof.remediation.extractor import extract_secret_value, locate_secret


@dataclass(frozen=True)
class RewriteResult:
    """Outcome of a successful rewrite."""

    updated: bool
    secret_value: str
    reference: str
    new_line: str


def read_source_lines(path: Path) -> list[str]:
    """Read ``path`` as UTF-8 and split it on newlines, keeping line endings."""
    try:
        text = path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise FileReadError(f"unable to read file: {exc}") from exc
    parts = text.split("\n")
    lines = [f"{part}\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def read_line(path: Path, line_number: int) -> str:
    """Return the content of the 1-based ``line_number`` without its ending."""
    lines = read_source_lines(path)
    if not 1 <= line_number <= len(lines):
        raise StaleLine(f"line {line_number} no longer exists ({len(lines)} lines in file)")
    return _strip_ending(lines[line_number - 1])


def capture_secret(path: Path, line_number: int) -> str:
    """Read the current target line and extract the secret it assigns."""
    value = extract_secret_value(read_line(path, line_number))
    if value is None:
        raise ExtractionFailure("unable to extract secret value from line")
    return value


def _normalize(text: str) -> str:
    return " ".join(text.split())


def _snippet_pattern(text: str) -> re.Pattern[str]:
    """Compile a normalized snippet line, letting masked runs stand for any characters."""
    parts = MASKED_VALUE_PATTERN.split(_normalize(text))
    return re.compile(".+?".join(re.escape(part) for part in parts))


def matching_snippet_line(line: str, snippet: str) -> str | None:
    """Return the recorded snippet line that still describes ``line``, or None.

    Whitespace is normalized on both sides. A single-line snippet may be a
    fragment of the current line; a multi-line snippet (the line with
    surrounding context) must contain the current line as one whole line.
    """
    normalized_line = _normalize(line)
    if not normalized_line:
        return None
    recorded = [candidate for candidate in snippet.splitlines() if _normalize(candidate)]
    if len(recorded) == 1:
        return recorded[0] if _snippet_pattern(recorded[0]).search(normalized_line) else None
    for candidate in recorded:
        if _snippet_pattern(candidate).fullmatch(normalized_line):
            return candidate
    return None


def snippet_matches(line: str, snippet: str) -> bool:
    """Whether the recorded snippet still describes ``line``."""
    return matching_snippet_line(line, snippet) is not None


def replace_secret_in_file(
    *,
    path: Path,
    line_number: int,
    env_key: str,
    expected_snippet: str,
    expected_value: str,
    reference_template: str = DEFAULT_REFERENCE_TEMPLATE,
) -> RewriteResult:
    """Swap the secret literal on one line for a reference to ``env_key``.

    ``reference_template`` is rendered with ``{key}`` replaced by ``env_key``.

    Raises ``StaleLine`` and leaves the file byte-for-byte unchanged when the
    line is gone or no longer matches the recorded snippet, or when its
    secret differs from ``expected_value`` or from an unmasked value in the
    snippet.
    """
    lines = read_source_lines(path)
    if not 1 <= line_number <= len(lines):
        raise StaleLine(f"line {line_number} no longer exists ({len(lines)} lines in file)")

    raw_line = lines[line_number - 1]
    content = _strip_ending(raw_line)
    ending = raw_line[len(content) :]

    recorded_line = matching_snippet_line(content, expected_snippet)
    if recorded_line is None:
        raise StaleLine("line no longer matches the recorded snippet")

    literal = locate_secret(content)
    if literal is None:
        raise StaleLine("secret value no longer present on line")
    if literal.value != expected_value:
        raise StaleLine("secret value on line differs from the recorded finding")
    recorded_value = extract_secret_value(recorded_line)
    if (
        recorded_value is not None
        and MASKED_VALUE_PATTERN.search(recorded_value) is None
        and recorded_value != literal.value
    ):
        raise StaleLine("secret value on line differs from the recorded snippet")

    reference = reference_template.replace(REFERENCE_KEY_PLACEHOLDER, env_key)
    new_line = content[: literal.start] + reference + content[literal.end :]
    lines[line_number - 1] = new_line + ending
    try:
        write_bytes_atomic(
            path=path,
            data="".join(lines).encode("utf-8"),
            temp_prefix=ATOMIC_TEMP_PREFIX,
            temp_suffix=ATOMIC_TEMP_SUFFIX,
            preserve_mode=True,
        )
    except OSError as exc:
        raise FileWriteError(f"unable to write file: {exc}") from exc
    return RewriteResult(updated=True, secret_value=literal.value, reference=reference, new_line=new_line)


def _strip_ending(line: str) -> str:
    return line.rstrip("\r\n")

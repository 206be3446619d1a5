"""Append-only env store holding externalized secrets."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from codeproof.constants.remediation import (
    ATOMIC_TEMP_PREFIX,
    ATOMIC_TEMP_SUFFIX,
    ENV_LINE_PATTERN,
    ENV_VALUE_ESCAPE_PATTERN,
    ENV_VALUE_NEEDS_QUOTES,
)
from codeproof.exceptions import EnvWriteFailure
from codeproof.io import write_bytes_atomic
from codeproof.model import EnvEntry

logger = logging.getLogger(__name__)


class KeyAllocator:
    """Hands out ``<prefix><n>`` keys that are unused in the store and in this run."""

    def __init__(self, prefix: str, used: Iterable[str] = ()) -> None:
        self._prefix = prefix
        self._used: set[str] = set(used)
        self._index = 1

    @property
    def used(self) -> frozenset[str]:
        """Keys known to be taken."""
        return frozenset(self._used)

    def peek(self) -> str:
        """Return the next free key without reserving it."""
        while f"{self._prefix}{self._index}" in self._used:
            self._index += 1
        return f"{self._prefix}{self._index}"

    def claim(self, key: str) -> None:
        """Mark ``key`` as assigned for the rest of the run."""
        if key in self._used:
            raise ValueError(f"Env key already assigned: {key}")
        self._used.add(key)


def ensure_env_file(path: Path) -> Path:
    """Create an empty store at ``path`` when none exists."""
    if not path.exists():
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.touch()
        except OSError as exc:
            raise EnvWriteFailure(f"Unable to create {path}: {exc}") from exc
        logger.info("Created %s", path)
    return path


def read_env_keys(path: Path) -> set[str]:
    """Return keys defined in the store; unrecognized lines are ignored."""
    return set(read_env_entries(path))


def read_env_entries(path: Path) -> dict[str, str]:
    """Parse ``KEY=VALUE`` lines into a mapping (later definitions win)."""
    if not path.exists():
        return {}
    entries: dict[str, str] = {}
    for line in path.read_text(encoding="utf-8").splitlines():
        match = ENV_LINE_PATTERN.match(line)
        if match is None:
            continue
        entries[match.group("key")] = _decode_value(line[match.end() :].strip())
    return entries


def format_env_entry(entry: EnvEntry) -> str:
    """Render one store line without its trailing newline."""
    return f"{entry.key}={_encode_value(entry.value)}"


def append_env_entries(path: Path, entries: Sequence[EnvEntry]) -> None:
    """Append all entries in a single atomic write, leaving prior bytes untouched."""
    if not entries:
        return

    try:
        existing = path.read_bytes() if path.exists() else b""
        separator = b"" if not existing or existing.endswith(b"\n") else b"\n"
        addition = "".join(f"{format_env_entry(entry)}\n" for entry in entries).encode("utf-8")
        write_bytes_atomic(
            path=path,
            data=existing + separator + addition,
            temp_prefix=ATOMIC_TEMP_PREFIX,
            temp_suffix=ATOMIC_TEMP_SUFFIX,
            preserve_mode=True,
        )
    except OSError as exc:
        raise EnvWriteFailure(f"Failed to write {path.name} entries: {exc}") from exc

    logger.info("Appended %d entr%s to %s", len(entries), "y" if len(entries) == 1 else "ies", path)


def _encode_value(value: str) -> str:
    if not ENV_VALUE_NEEDS_QUOTES.search(value):
        return value
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _decode_value(raw: str) -> str:
    if len(raw) >= 2 and raw[0] == raw[-1] == '"':
        return ENV_VALUE_ESCAPE_PATTERN.sub(r"\1", raw[1:-1])
    if len(raw) >= 2 and raw[0] == raw[-1] == "'":
        return raw[1:-1]
    return raw

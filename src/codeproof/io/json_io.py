"""JSON read helpers and atomic write helpers."""

from __future__ import annotations

import json
import os
import tempfile
from contextlib import suppress
from pathlib import Path


def load_json_file(path: Path) -> object:
    """Load and parse JSON from disk."""
    return json.loads(path.read_text(encoding="utf-8"))


def write_bytes_atomic(
    *,
    path: Path,
    data: bytes,
    temp_prefix: str,
    temp_suffix: str,
    preserve_mode: bool = False,
) -> None:
    """Persist raw bytes atomically by writing to a temp file then renaming.

    With ``preserve_mode`` the permission bits of an existing ``path`` are
    copied onto the replacement before the rename.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    mode: int | None = None
    if preserve_mode and path.exists():
        mode = path.stat().st_mode & 0o7777

    temp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="wb",
            dir=path.parent,
            prefix=temp_prefix,
            suffix=temp_suffix,
            delete=False,
        ) as handle:
            temp_name = handle.name
            handle.write(data)
        if mode is not None:
            os.chmod(temp_name, mode)
        os.replace(temp_name, path)
    except Exception:
        if temp_name:
            with suppress(FileNotFoundError):
                Path(temp_name).unlink()
        raise

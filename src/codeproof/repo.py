"""Repository root discovery."""

from __future__ import annotations

from pathlib import Path

from codeproof.exceptions import ConfigError


def find_repository_root(start: Path) -> Path:
    """Walk up from ``start`` to the nearest directory containing ``.git``."""
    current = start.resolve()
    if current.is_file():
        current = current.parent
    for candidate in (current, *current.parents):
        if (candidate / ".git").exists():
            return candidate
    raise ConfigError(f"Not inside a git repository: {current} (use --root to choose a directory)")

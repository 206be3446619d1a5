"""Path helpers shared by the remediation stages and reporters."""

from __future__ import annotations

from pathlib import Path


def display_path(path: Path, root: Path) -> str:
    """Render ``path`` relative to ``root`` when possible."""
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()


def resolve_under_root(raw_path: str, root: Path) -> Path:
    """Resolve a report path, treating relative paths as root-relative."""
    path = Path(raw_path)
    if not path.is_absolute():
        path = root / path
    return path.resolve()


def is_within(path: Path, root: Path) -> bool:
    """Return True when ``path`` is ``root`` or lies beneath it."""
    return path == root or root in path.parents

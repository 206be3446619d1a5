"""Secret remediation pipeline package."""

from __future__ import annotations

from typing import Any

__all__ = ["run_move_secret"]


def __getattr__(name: str) -> Any:
    """Lazily expose the orchestrator to avoid import cycles at package import time."""
    if name == "run_move_secret":
        from .orchestrator import run_move_secret

        return run_move_secret
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

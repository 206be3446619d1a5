"""Shared utility helpers."""

from __future__ import annotations

from .paths import display_path, is_within, resolve_under_root

__all__ = ["display_path", "is_within", "resolve_under_root"]

"""Configuration loading, validation, and normalization for Codeproof."""

from __future__ import annotations

from codeproof.config.loader import load_config
from codeproof.config.model import CodeproofConfig

__all__ = ["CodeproofConfig", "load_config"]

"""Configuration-related exceptions."""

from __future__ import annotations

from codeproof.exceptions.base import CodeproofError


class ConfigError(CodeproofError, ValueError):
    """Raised when configuration or invocation settings are invalid."""

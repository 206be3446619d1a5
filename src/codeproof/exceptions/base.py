"""Root exception for Codeproof."""

from __future__ import annotations


class CodeproofError(Exception):
    """Base class for all Codeproof errors."""

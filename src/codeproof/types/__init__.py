"""Shared type aliases for Codeproof."""

from .common import JsonObject, JsonScalar, JsonValue, ResultKind, RunStatus

__all__ = [
    "JsonObject",
    "JsonScalar",
    "JsonValue",
    "ResultKind",
    "RunStatus",
]

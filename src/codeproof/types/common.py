"""Cross-module type aliases."""

from __future__ import annotations

from typing import Literal, TypeAlias

ResultKind: TypeAlias = Literal["moved", "skipped", "error"]
RunStatus: TypeAlias = Literal["disabled", "no_report", "nothing_eligible", "declined", "completed"]

JsonScalar: TypeAlias = str | int | float | bool | None
JsonValue: TypeAlias = JsonScalar | list["JsonValue"] | dict[str, "JsonValue"]
JsonObject: TypeAlias = dict[str, JsonValue]

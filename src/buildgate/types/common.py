"""Cross-module type aliases."""

from __future__ import annotations

from typing import Literal, TypeAlias

Severity: TypeAlias = Literal["low", "normal", "high"]
Classification: TypeAlias = Literal["stable", "unstable", "failed"]
DeltaMode: TypeAlias = Literal["set_difference", "absolute"]
RunStatus: TypeAlias = Literal["completed", "in_progress"]
Bucket: TypeAlias = Literal[
    "total_all",
    "total_high",
    "total_normal",
    "total_low",
    "new_all",
    "new_high",
    "new_normal",
    "new_low",
]

JsonScalar: TypeAlias = str | int | float | bool | None
JsonValue: TypeAlias = JsonScalar | list["JsonValue"] | dict[str, "JsonValue"]
JsonObject: TypeAlias = dict[str, JsonValue]

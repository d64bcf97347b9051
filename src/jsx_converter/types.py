"""Shared type aliases for pipeline modules."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Literal, TypeAlias

CheckStatus: TypeAlias = Literal["passed", "failed"]

JsonScalar: TypeAlias = str | int | float | bool | None
JsonValue: TypeAlias = JsonScalar | list["JsonValue"] | dict[str, "JsonValue"]
JsonObject: TypeAlias = dict[str, JsonValue]

Command: TypeAlias = Sequence[str]

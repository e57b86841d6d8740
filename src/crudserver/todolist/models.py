"""
=============================================================================
TODO-LIST DATA TRANSFER RECORDS
=============================================================================

Request payloads for the todo-list API. The API itself is not built yet;
these records pin down the wire format so it can be.

    POST  body → CreateEntryData   {"date": 1700000000, "title": "Buy milk"}
    PUT   body → UpdateEntryData   {"title": "Buy oat milk"}

"date" is a Unix timestamp in seconds. Unknown keys are ignored, missing
or mistyped keys raise ValueError.

=============================================================================
"""

from dataclasses import dataclass
from typing import Any


def _require(data: Any, key: str, kind: type) -> Any:
    if not isinstance(data, dict):
        raise ValueError("Payload must be a JSON object")
    if key not in data:
        raise ValueError(f"Missing field {key!r}")

    value = data[key]
    # Reject JSON booleans where an integer is expected
    if kind is int and isinstance(value, bool):
        raise ValueError(f"Field {key!r} must be {kind.__name__}")
    if not isinstance(value, kind):
        raise ValueError(f"Field {key!r} must be {kind.__name__}")
    return value


@dataclass(frozen=True)
class CreateEntryData:
    """Payload for creating a todo entry."""

    date: int
    title: str

    @classmethod
    def from_dict(cls, data: Any) -> "CreateEntryData":
        return cls(date=_require(data, "date", int), title=_require(data, "title", str))


@dataclass(frozen=True)
class UpdateEntryData:
    """Payload for renaming a todo entry."""

    title: str

    @classmethod
    def from_dict(cls, data: Any) -> "UpdateEntryData":
        return cls(title=_require(data, "title", str))

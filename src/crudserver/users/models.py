"""
User record and its JSON mapping.

    Request body (create/update):  {"name": "Alice", "email": "a@x.com"}
    Response body (read):          {"id":1,"name":"Alice","email":"a@x.com"}

An incoming "id" is accepted (null or an integer) and otherwise ignored:
ids are assigned by the database and never change.
"""

from dataclasses import dataclass
from typing import Any, Optional

from ..http.request import INT32_MAX, INT32_MIN


@dataclass
class User:
    """A row of the users table."""

    name: str
    email: str
    id: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Any) -> "User":
        """
        Build a User from decoded JSON.

        Raises:
            ValueError: If data is not an object, or name/email are missing,
                not strings or not encodable as UTF-8, or id is neither null
                nor a signed 32-bit integer.
        """
        if not isinstance(data, dict):
            raise ValueError("User payload must be a JSON object")

        for key in ("name", "email"):
            if not isinstance(data.get(key), str):
                raise ValueError(f"User field {key!r} must be a string")
            # JSON escapes can produce lone surrogates, which no driver can store
            data[key].encode("utf-8")

        user_id = data.get("id")
        # bool is an int subclass; true/false are not ids
        if user_id is not None and (isinstance(user_id, bool) or not isinstance(user_id, int)):
            raise ValueError("User field 'id' must be an integer or null")
        if user_id is not None and not INT32_MIN <= user_id <= INT32_MAX:
            raise ValueError(f"User field 'id' out of range: {user_id}")

        return cls(name=data["name"], email=data["email"], id=user_id)

    @classmethod
    def from_row(cls, row: Any) -> "User":
        """Map a (id, name, email) row positionally."""
        return cls(id=row[0], name=row[1], email=row[2])

    def to_dict(self) -> dict:
        # Key order is part of the wire format
        return {"id": self.id, "name": self.name, "email": self.email}

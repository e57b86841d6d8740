"""
=============================================================================
RAW HTTP REQUEST
=============================================================================

This server does NOT parse HTTP. It reads one buffer of bytes, turns it
into text and pulls out the three things the users API needs:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                     WHAT WE LOOK AT                                 │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   PUT /users/42 HTTP/1.1\r\n                                         │
    │   ───────────── ──                                                   │
    │        │         │                                                   │
    │        │         └── 2. the id: text after the 2nd "/", up to       │
    │        │               the next whitespace                           │
    │        └──────────── 1. the "METHOD /path" prefix (routing)          │
    │                                                                      │
    │   Host: localhost:8080\r\n          (ignored)                        │
    │   Content-Type: application/json\r\n (ignored)                       │
    │   \r\n                                                               │
    │   {"name": "Alice", "email": "a@x.com"}                             │
    │   ─────────────────────────────────────                              │
    │                    │                                                 │
    │                    └── 3. the body: everything after the LAST       │
    │                           blank line                                 │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Headers are never looked at. Query strings are not stripped. Anything that
does not fit in the read buffer is simply not there.

=============================================================================
LOSSY DECODING
=============================================================================

Bytes off the wire are not guaranteed to be valid UTF-8. We decode with
errors="replace", so every invalid sequence becomes U+FFFD instead of
raising. A request with garbage bytes still gets routed (and usually
404s), it never crashes the handler.

=============================================================================
"""

import json
import re
from dataclasses import dataclass
from typing import Any


HEADER_TERMINATOR = "\r\n\r\n"

# Ids are signed 32-bit integers (the users.id column is SERIAL / int4)
INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


class RequestParseError(ValueError):
    """Raised when the id or the body of a request cannot be extracted."""


@dataclass
class RawRequest:
    """
    A request as received: the decoded text of one read buffer.

    Attributes:
        text: Request text, possibly truncated by the read buffer size.
        client_address: Client's (ip, port) tuple, for logging.
    """

    text: str
    client_address: tuple = ("", 0)

    @classmethod
    def from_bytes(cls, data: bytes, client_address: tuple = ("", 0)) -> "RawRequest":
        """Decode raw socket bytes, replacing invalid UTF-8 sequences."""
        return cls(data.decode("utf-8", errors="replace"), client_address)

    # =========================================================================
    # ROUTING HELPERS
    # =========================================================================

    def startswith(self, prefix: str) -> bool:
        """Check for a literal, case-sensitive prefix such as "GET /users/"."""
        return self.text.startswith(prefix)

    @property
    def request_line(self) -> str:
        """First line of the request, for log output."""
        return self.text.split("\r\n", 1)[0]

    @property
    def method(self) -> str:
        """Best-effort method token, for log output only."""
        parts = self.request_line.split(" ", 1)
        return parts[0] if parts else ""

    @property
    def path(self) -> str:
        """Best-effort request target, for log output only."""
        parts = self.request_line.split(" ")
        return parts[1] if len(parts) > 1 else ""

    # =========================================================================
    # ID EXTRACTION
    # =========================================================================

    @property
    def raw_id(self) -> str:
        """
        The id segment of the request, unparsed.

        Split the whole request on "/" and take the piece at index 2, then
        cut it at the first whitespace:

            "GET /users/42 HTTP/1.1\\r\\n..."
                .split("/")      → ["GET ", "users", "42 HTTP", "1.1\\r\\n..."]
                [2]              → "42 HTTP"
                .split()[0]      → "42"

        Missing pieces give "" (which then fails to parse as an id).
        """
        segments = self.text.split("/")
        if len(segments) < 3:
            return ""
        words = segments[2].split()
        return words[0] if words else ""

    def user_id(self) -> int:
        """
        Parse the id segment as a signed 32-bit integer.

        Raises:
            RequestParseError: If the segment is not an integer in range.
        """
        raw = self.raw_id
        if not _INTEGER_RE.fullmatch(raw):
            raise RequestParseError(f"Invalid id: {raw!r}")

        value = int(raw)
        if not INT32_MIN <= value <= INT32_MAX:
            raise RequestParseError(f"Id out of range: {raw}")
        return value

    # =========================================================================
    # BODY EXTRACTION
    # =========================================================================

    @property
    def body(self) -> str:
        """
        Everything after the LAST blank line.

        If the request has no blank line at all, this is the whole text
        (which will not be valid JSON).
        """
        return self.text.split(HEADER_TERMINATOR)[-1]

    def json(self) -> Any:
        """
        Decode the body as JSON.

        Raises:
            RequestParseError: If the body is not valid JSON.
        """
        try:
            return json.loads(self.body)
        except json.JSONDecodeError as e:
            raise RequestParseError(f"Invalid JSON body: {e}") from e

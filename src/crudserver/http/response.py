"""
=============================================================================
HTTP RESPONSE
=============================================================================

A response here is a pair: (status line, body). Serializing it is plain
concatenation.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                     RESPONSE ON THE WIRE                            │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │  ┌─ STATUS LINE (fixed literal, includes headers) ───────────────┐  │
    │  │    HTTP/1.1 200 OK\r\n                                         │  │
    │  │    Content-Type: application/json\r\n                          │  │
    │  │    \r\n                                                         │  │
    │  └─────────────────────────────────────────────────────────────────┘  │
    │  ┌─ BODY ─────────────────────────────────────────────────────────┐  │
    │  │    [{"id":1,"name":"Alice","email":"a@x.com"}]                 │  │
    │  └─────────────────────────────────────────────────────────────────┘  │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

The body is JSON for the read endpoints and short plain text
("User created", "User not found", ...) everywhere else, even though the
200 status line always claims application/json.

=============================================================================
"""

import json
from dataclasses import dataclass
from typing import Any

from .status_codes import HTTPStatus


@dataclass
class HTTPResponse:
    """
    Represents an HTTP response to be sent to the client.

        Handler returns          to_bytes()              Socket sends
        HTTPResponse    ─────►   status_line    ─────►   raw bytes
                                 + body
    """

    status: HTTPStatus = HTTPStatus.OK
    body: str = ""

    @property
    def status_line(self) -> str:
        """The fixed status line for this response's status."""
        return self.status.status_line

    def to_bytes(self) -> bytes:
        """Serialize to bytes ready for socket.sendall()."""
        return f"{self.status_line}{self.body}".encode("utf-8")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================
#
#     return ok("User created")
#     return ok_json([user.to_dict() for user in users])
#     return not_found("User not found")
#
# =============================================================================


def dump_json(data: Any) -> str:
    """Compact JSON, no spaces after separators, non-ASCII left as UTF-8."""
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


def ok(body: str = "") -> HTTPResponse:
    """Create a 200 OK response with a plain text body."""
    return HTTPResponse(HTTPStatus.OK, body)


def ok_json(data: Any) -> HTTPResponse:
    """Create a 200 OK response with a JSON-encoded body."""
    return HTTPResponse(HTTPStatus.OK, dump_json(data))


def not_found(body: str = "NOT FOUND") -> HTTPResponse:
    """Create a 404 NOT FOUND response."""
    return HTTPResponse(HTTPStatus.NOT_FOUND, body)


def internal_error(body: str = "Internal Server Error") -> HTTPResponse:
    """Create a 500 INTERNAL SERVER ERROR response."""
    return HTTPResponse(HTTPStatus.INTERNAL_SERVER_ERROR, body)

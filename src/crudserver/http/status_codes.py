"""
=============================================================================
HTTP STATUS CODES
=============================================================================

The server only ever answers with three status codes. Each one maps to a
FIXED status line that already includes the header block and the blank
line that ends it, so a response is just ``status_line + body``.

    ┌───────┬─────────────────────────────────────────────────────────────┐
    │ Code  │ Status line (exact bytes on the wire)                        │
    ├───────┼─────────────────────────────────────────────────────────────┤
    │ 200   │ HTTP/1.1 200 OK\r\n                                         │
    │       │ Content-Type: application/json\r\n\r\n                      │
    │ 404   │ HTTP/1.1 404 NOT FOUND\r\n\r\n                              │
    │ 500   │ HTTP/1.1 500 INTERNAL SERVER ERROR\r\n\r\n                  │
    └───────┴─────────────────────────────────────────────────────────────┘

Note there is no Content-Length header. The client learns the body has
ended when the server closes the connection (HTTP/1.0 style framing).

=============================================================================
INTERVIEW QUESTIONS ABOUT STATUS CODES
=============================================================================

Q: "Why does a successful DELETE return 200 instead of 204?"
A: "204 No Content forbids a body. This API returns a short text
   confirmation ('User deleted'), so 200 is the honest choice."

Q: "Why is an unparsable id a 500 and not a 400?"
A: "It should be a 400. This server folds it into the same generic 500 as
   an unreachable database. It is a known wart, kept for compatibility."

=============================================================================
"""

from enum import IntEnum


class HTTPStatus(IntEnum):
    """
    HTTP status codes used by the server.

    Extends IntEnum, so codes compare as integers:
        >>> HTTPStatus.NOT_FOUND == 404
        True
        >>> HTTPStatus.OK.phrase
        'OK'
    """

    OK = 200                        # Request succeeded
    NOT_FOUND = 404                 # No route, or no such user
    INTERNAL_SERVER_ERROR = 500     # Anything else that went wrong

    @property
    def phrase(self) -> str:
        """Reason phrase as it appears on the status line."""
        return _STATUS_PHRASES[self]

    @property
    def status_line(self) -> str:
        """
        The full literal status line, including the header terminator.

        Only 200 carries a Content-Type header; error bodies are plain text.
        """
        line = f"HTTP/1.1 {int(self)} {self.phrase}\r\n"
        if self is HTTPStatus.OK:
            line += "Content-Type: application/json\r\n"
        return line + "\r\n"


_STATUS_PHRASES = {
    HTTPStatus.OK: "OK",
    HTTPStatus.NOT_FOUND: "NOT FOUND",
    HTTPStatus.INTERNAL_SERVER_ERROR: "INTERNAL SERVER ERROR",
}

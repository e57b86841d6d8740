"""
=============================================================================
HTTP PROTOCOL COMPONENTS
=============================================================================

Just enough HTTP for the users API:

    request.py       RawRequest: lossy-decoded buffer, id and body helpers
    response.py      HTTPResponse: status line + body, ok()/not_found()/...
    router.py        Router: ordered literal-prefix route table
    status_codes.py  HTTPStatus: the three status lines the server uses

=============================================================================
"""

from .status_codes import HTTPStatus
from .request import RawRequest, RequestParseError
from .response import (
    HTTPResponse,
    dump_json,
    ok,
    ok_json,
    not_found,
    internal_error,
)
from .router import Router, Route, Handler


__all__ = [
    "HTTPStatus",
    "RawRequest",
    "RequestParseError",
    "HTTPResponse",
    "dump_json",
    "ok",
    "ok_json",
    "not_found",
    "internal_error",
    "Router",
    "Route",
    "Handler",
]

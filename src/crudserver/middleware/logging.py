"""
=============================================================================
ACCESS LOGGING MIDDLEWARE
=============================================================================

One log line per request, with timing.

=============================================================================
LOG FORMATS
=============================================================================

    TEXT (default, Apache-like):
    ┌─────────────────────────────────────────────────────────────────────┐
    │ 172.17.0.1 - - [17/Oct/2026:10:55:36 +0000] "GET /users" 200 45 3.1ms│
    │ ───────────────────────────────────────────────────────────────────│
    │ IP          Timestamp                  Method/Path Status Size Time │
    └─────────────────────────────────────────────────────────────────────┘

    JSON (for log aggregators):
    ┌─────────────────────────────────────────────────────────────────────┐
    │ {"request_id": "a1b2c3d4", "method": "GET", "path": "/users",       │
    │  "client_ip": "172.17.0.1", "status_code": 200, ...}                │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
LOGGER NAME
=============================================================================

Access logs go to "crudserver.access", separate from the application
loggers, so they can be routed or silenced on their own:

    logging.getLogger("crudserver.access").setLevel(logging.WARNING)

=============================================================================
"""

import json
import logging
import time
import uuid
from dataclasses import asdict, dataclass
from typing import Optional

from ..http.request import RawRequest
from ..http.response import HTTPResponse
from .base import Middleware, NextHandler


logger = logging.getLogger("crudserver.access")


@dataclass
class RequestLog:
    """Structured log entry for one request/response exchange."""

    request_id: str
    method: str
    path: str
    client_ip: str
    status_code: int
    content_length: int
    duration_ms: float
    timestamp: str

    def to_dict(self) -> dict:
        data = asdict(self)
        data["duration_ms"] = round(self.duration_ms, 2)
        return data

    def to_text(self) -> str:
        return (
            f'{self.client_ip or "-"} - - [{self.timestamp}] '
            f'"{self.method} {self.path}" {self.status_code} '
            f'{self.content_length} {self.duration_ms:.2f}ms'
        )


class LoggingMiddleware(Middleware):
    """
    Request logging middleware. Add it FIRST so it times everything.

        pipeline.add(LoggingMiddleware(log_format="json"))
    """

    def __init__(
        self,
        log_format: str = "text",
        log_level: int = logging.INFO,
        skip_paths: Optional[list] = None,
    ):
        """
        Args:
            log_format: "text" or "json".
            log_level: Level used for access log records.
            skip_paths: Request paths that are not logged.
        """
        self.log_format = log_format
        self.log_level = log_level
        self.skip_paths = set(skip_paths or [])

    def __call__(self, request: RawRequest, next: NextHandler) -> HTTPResponse:
        # Short id to correlate the access line with application logs
        request_id = str(uuid.uuid4())[:8]
        start_time = time.time()

        try:
            response = next(request)
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.error(
                f"[{request_id}] Request failed: {request.request_line!r} "
                f"- {type(e).__name__}: {e} ({duration_ms:.2f}ms)"
            )
            raise

        duration_ms = (time.time() - start_time) * 1000

        if request.path in self.skip_paths:
            return response

        log_entry = RequestLog(
            request_id=request_id,
            method=request.method,
            path=request.path,
            client_ip=request.client_address[0] if request.client_address else "",
            status_code=int(response.status),
            content_length=len(response.body.encode("utf-8")),
            duration_ms=duration_ms,
            timestamp=time.strftime("%d/%b/%Y:%H:%M:%S %z"),
        )

        if self.log_format == "json":
            logger.log(self.log_level, json.dumps(log_entry.to_dict()))
        else:
            logger.log(self.log_level, log_entry.to_text())

        return response

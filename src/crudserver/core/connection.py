"""
=============================================================================
CONNECTION
=============================================================================

Wraps one accepted client socket for exactly ONE request/response
exchange:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   accept() ──► read_request() ──► send_response() ──► close()        │
    │                   │                                                  │
    │                   └── ONE recv(buffer_size) call                     │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
TCP IS A BYTE STREAM, AND WE IGNORE THAT
=============================================================================

A real HTTP server keeps calling recv() until it sees the blank line that
ends the headers, then reads Content-Length more bytes of body. This one
doesn't. It calls recv() ONCE and works with whatever came back:

    Client sends 1500 bytes   →   we see the first 1024
    Client sends in 2 packets →   we may only see the first one

That is fine for small JSON bodies on a local network and a known
limitation everywhere else. No keep-alive either: one request per
connection, then close.

=============================================================================
"""

import logging
import socket
import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


logger = logging.getLogger(__name__)


class ConnectionState(Enum):
    """Connection lifecycle states, for logging and debugging."""

    NEW = "new"                # Just accepted
    READING = "reading"        # Inside recv()
    PROCESSING = "processing"  # Request read, handler running
    WRITING = "writing"        # Sending the response
    CLOSED = "closed"          # Socket released


@dataclass
class Connection:
    """
    Represents a client connection.

    Attributes:
        socket: The client socket.
        address: Client's (ip, port) tuple.
        id: Unique connection identifier (for logging).
        state: Current connection state.
        buffer_size: Bytes requested from the single recv() call.
        timeout: Socket timeout in seconds, None = blocking.
    """

    socket: socket.socket
    address: tuple

    id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    state: ConnectionState = ConnectionState.NEW
    created_at: float = field(default_factory=time.time)

    buffer_size: int = 1024
    timeout: Optional[float] = None

    def __post_init__(self):
        self.socket.settimeout(self.timeout)

    @property
    def age(self) -> float:
        """Connection age in seconds."""
        return time.time() - self.created_at

    # =========================================================================
    # READING
    # =========================================================================

    def read_request(self) -> bytes:
        """
        Read the request with a single recv().

        Returns:
            Up to buffer_size bytes. b"" if the client sent nothing and
            closed its side.

        Raises:
            OSError: If the read fails (reset, timeout, ...).
        """
        self.state = ConnectionState.READING
        data = self.socket.recv(self.buffer_size)
        self.state = ConnectionState.PROCESSING
        logger.debug(f"[{self.id}] Read {len(data)} bytes")
        return data

    # =========================================================================
    # WRITING
    # =========================================================================

    def send_response(self, data: bytes) -> bool:
        """
        Send the whole response with sendall().

        Returns:
            True if sent, False if the client went away.
        """
        self.state = ConnectionState.WRITING
        try:
            self.socket.sendall(data)
            return True
        except OSError as e:
            logger.warning(f"[{self.id}] Send failed: {e}")
            return False

    # =========================================================================
    # CLOSING
    # =========================================================================

    def close(self):
        """
        Close the connection.

        shutdown(SHUT_WR) first sends FIN, so the client sees end-of-body
        even before the descriptor is released.
        """
        if self.state == ConnectionState.CLOSED:
            return

        try:
            self.socket.shutdown(socket.SHUT_WR)
        except OSError:
            pass  # Client already gone

        try:
            self.socket.close()
        except OSError:
            pass

        self.state = ConnectionState.CLOSED
        logger.debug(f"[{self.id}] Connection closed after {self.age * 1000:.1f}ms")

    def __enter__(self) -> "Connection":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False  # Don't suppress exceptions

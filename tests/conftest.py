"""
pytest configuration and fixtures.
"""

import socket
import threading
from typing import Generator
import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from crudserver import ServerConfig, create_app
from crudserver.http import RawRequest
from crudserver.store import InMemoryUserStore, SQLUserStore


def make_request(text: str) -> RawRequest:
    """Build a request from text, as if it came off the wire."""
    return RawRequest.from_bytes(text.encode("utf-8"), ("127.0.0.1", 50000))


def send_raw(port: int, data: bytes, timeout: float = 5.0) -> bytes:
    """Send one request, read until the server closes the connection."""
    with socket.create_connection(("127.0.0.1", port), timeout=timeout) as s:
        s.sendall(data)
        chunks = []
        while True:
            chunk = s.recv(4096)
            if not chunk:
                break
            chunks.append(chunk)
    return b"".join(chunks)


@pytest.fixture
def sample_post_request() -> bytes:
    """Sample HTTP POST request with JSON body."""
    body = b'{"name": "Alice", "email": "a@x.com"}'
    return (
        b"POST /users HTTP/1.1\r\n"
        b"Host: localhost:8080\r\n"
        b"Content-Type: application/json\r\n"
        + f"Content-Length: {len(body)}\r\n".encode()
        + b"\r\n"
        + body
    )


@pytest.fixture
def config() -> ServerConfig:
    """Test server configuration on an OS-assigned port."""
    return ServerConfig(
        host="127.0.0.1",
        port=0,
        timeout=5.0,
        database_url="sqlite://",
        log_level="WARNING",
    )


@pytest.fixture
def memory_store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def sql_store(tmp_path) -> Generator[SQLUserStore, None, None]:
    """
    SQLite file store with the schema created.

    A file, not sqlite://: every operation opens a fresh connection and an
    in-memory database would vanish between them.
    """
    store = SQLUserStore.from_url(f"sqlite:///{tmp_path / 'users.db'}")
    store.init_schema()
    yield store
    store.close()


class RunningServer:
    """Test server helper that runs in a background thread."""

    def __init__(self, server):
        self.server = server
        self._thread: threading.Thread = None

    @property
    def port(self) -> int:
        return self.server.address[1]

    def start(self):
        """Start server in background thread."""
        self._thread = threading.Thread(target=self.server.run, daemon=True)
        self._thread.start()

        if not self.server.wait_until_ready(timeout=5.0):
            raise RuntimeError("Server failed to start")

    def stop(self):
        """Stop the server."""
        self.server.stop()

        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)

    def request(self, data) -> bytes:
        if isinstance(data, str):
            data = data.encode("utf-8")
        return send_raw(self.port, data)


def start_server(config: ServerConfig, store) -> RunningServer:
    running = RunningServer(create_app(config, store))
    running.start()
    return running


@pytest.fixture
def test_server(config: ServerConfig, memory_store) -> Generator[RunningServer, None, None]:
    """A users server backed by the in-memory store."""
    running = start_server(config, memory_store)
    yield running
    running.stop()


@pytest.fixture
def sql_server(config: ServerConfig, sql_store) -> Generator[RunningServer, None, None]:
    """A users server backed by SQLite."""
    running = start_server(config, sql_store)
    yield running
    running.stop()

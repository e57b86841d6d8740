"""
=============================================================================
HTTP SERVER
=============================================================================

Ties the pieces together: socket acceptor, request handling, router and
middleware.

=============================================================================
REQUEST LIFECYCLE
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   1. SocketServer accepts a TCP connection                           │
    │   2. Connection.read_request()  → up to 1024 bytes, one recv()       │
    │   3. RawRequest.from_bytes()    → lossy UTF-8 text                   │
    │   4. Middleware (access log)    → Router.handle()                    │
    │   5. Router                     → first matching "METHOD /path"      │
    │   6. Handler                    → HTTPResponse(status, body)         │
    │   7. Connection.send_response() → status_line + body                 │
    │   8. Connection.close()         → next accept()                      │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Failure at each step:

    read fails        → logged, connection closed, no response
    handler raises    → logged with traceback, 500 "Internal Server Error"
    write fails       → logged, connection closed
    none of these stop the accept loop

=============================================================================
"""

import logging
from typing import Callable, Optional

from .config import ServerConfig
from .core import Connection, SocketServer
from .http import HTTPResponse, RawRequest, Router, internal_error
from .middleware import Middleware, MiddlewarePipeline


logger = logging.getLogger(__name__)


def configure_logging(log_level: str) -> None:
    """Configure the root logger once (no-op if already configured)."""
    level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("crudserver").setLevel(level)


class HTTPServer:
    """
    Single-threaded HTTP server.

        server = HTTPServer(ServerConfig(port=8080, database_url=url))

        @server.get("/users")
        def list_users(request):
            return ok_json([])

        server.use(LoggingMiddleware())
        server.run()
    """

    def __init__(self, config: Optional[ServerConfig] = None):
        self.config = config or ServerConfig()
        self.config.validate()  # Fail-fast on invalid config

        self._socket_server = SocketServer(self.config)
        self._router = Router()
        self._middleware = MiddlewarePipeline()

        # Built in run(): middleware.wrap(router.handle)
        self._handler: Optional[Callable[[RawRequest], HTTPResponse]] = None
        self._running = False

    # =========================================================================
    # CONFIGURATION METHODS
    # =========================================================================

    def use(self, middleware: Middleware) -> "HTTPServer":
        """Add middleware. First added runs outermost."""
        self._middleware.add(middleware)
        return self

    @property
    def router(self) -> Router:
        return self._router

    @property
    def address(self):
        """Bound (host, port) once running."""
        return self._socket_server.address

    def route(self, path: str, method: str, name: Optional[str] = None):
        return self._router.route(path, method, name)

    def get(self, path: str, name: Optional[str] = None):
        return self._router.get(path, name)

    def post(self, path: str, name: Optional[str] = None):
        return self._router.post(path, name)

    def put(self, path: str, name: Optional[str] = None):
        return self._router.put(path, name)

    def delete(self, path: str, name: Optional[str] = None):
        return self._router.delete(path, name)

    # =========================================================================
    # SERVER LIFECYCLE
    # =========================================================================

    def run(self):
        """
        Start serving. Blocks until stop(), SIGINT or SIGTERM.

        Raises:
            OSError: If the listening socket cannot be bound.
        """
        self._setup_logging()
        self._handler = self._middleware.wrap(self._router.handle)
        self._running = True

        self._print_startup_banner()

        try:
            self._socket_server.start(self._handle_connection)
        except KeyboardInterrupt:
            logger.info("Received keyboard interrupt")
        finally:
            self._running = False
            logger.info("Server stopped")

    def stop(self):
        """Ask the accept loop to exit. Safe from any thread."""
        self._socket_server.shutdown()

    def wait_until_ready(self, timeout: Optional[float] = None) -> bool:
        return self._socket_server.wait_until_ready(timeout)

    def _print_startup_banner(self):
        print()
        print(f"  crud-server on http://{self.config.host}:{self.config.port}")
        print("  Routes (first match wins):")
        print(self._router.describe())
        print()

    def _setup_logging(self):
        configure_logging(self.config.log_level)

    # =========================================================================
    # REQUEST HANDLING
    # =========================================================================

    def _handle_connection(self, conn: Connection):
        """
        Serve exactly one request on conn, then close it.

        Called synchronously from the accept loop.
        """
        with conn:
            try:
                data = conn.read_request()
            except OSError as e:
                logger.error(f"[{conn.id}] Read error: {e}")
                return

            request = RawRequest.from_bytes(data, conn.address)
            response = self.handle_request(request)
            conn.send_response(response.to_bytes())

    def handle_request(self, request: RawRequest) -> HTTPResponse:
        """
        Run a request through middleware and router.

        Never raises: a handler exception becomes a 500.
        """
        handler = self._handler or self._middleware.wrap(self._router.handle)
        try:
            return handler(request)
        except Exception as e:
            logger.exception(f"Handler error for {request.request_line!r}: {e}")
            return internal_error()

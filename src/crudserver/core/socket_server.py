"""
=============================================================================
TCP SOCKET SERVER (CONNECTION ACCEPTOR)
=============================================================================

Binds the listening socket and accepts connections ONE AT A TIME.

=============================================================================
SOCKET LIFECYCLE (Server Side)
=============================================================================

    1. socket()    Create a socket file descriptor
    2. bind()      Associate the socket with an IP:PORT
                   └─ fails if the port is taken → startup aborts
    3. listen()    Mark socket as a "listening" socket
                   └─ OS starts queueing incoming connections
    4. accept()    Wait for and accept an incoming connection
                   └─ Returns a NEW socket just for that client
    5. close()     Release the socket resources

=============================================================================
STRICTLY SEQUENTIAL
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   while running:                                                     │
    │       conn = accept()          ◄── blocks (1s timeout, then poll)    │
    │       connection_handler(conn) ◄── read, route, DB, write, close     │
    │       ...only now do we accept the next client                       │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

While one request is being handled, other clients wait in the OS accept
queue (size = backlog). A slow client or a slow database stalls everyone.
There is no thread pool on purpose; the handlers share no in-process
state, so adding one later only needs a thread-safe store.

=============================================================================
SIGNAL HANDLING
=============================================================================

SIGINT (Ctrl+C) and SIGTERM (docker stop) flip the running flag. The
accept() timeout makes the loop notice within a second. Python only lets
the MAIN thread install signal handlers, so a server started from a
background thread (tests) skips this step and is stopped with shutdown().

=============================================================================
"""

import logging
import signal
import socket
import threading
from typing import Callable, Optional, Tuple

from ..config import ServerConfig
from .connection import Connection


logger = logging.getLogger(__name__)

ACCEPT_POLL_INTERVAL = 1.0


class SocketServer:
    """
    Low-level TCP socket server.

        def handle_connection(conn: Connection):
            ...

        server = SocketServer(config)
        server.start(handle_connection)  # Blocks until shutdown
    """

    def __init__(self, config: ServerConfig):
        self.config = config
        self._socket: Optional[socket.socket] = None
        self._running = False
        self._bound_address: Optional[Tuple[str, int]] = None

        # Set once the socket is listening; tests wait on it
        self._ready_event = threading.Event()

        self._original_handlers: dict = {}

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def address(self) -> Tuple[str, int]:
        """
        The bound (host, port). Differs from the config when port=0 was
        requested and the OS picked one.
        """
        return self._bound_address or (self.config.host, self.config.port)

    def _create_socket(self) -> socket.socket:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)

        # Avoid "Address already in use" while old sockets sit in TIME_WAIT
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)

        # accept() wakes up periodically to check the running flag
        sock.settimeout(ACCEPT_POLL_INTERVAL)
        return sock

    def _setup_signals(self):
        if threading.current_thread() is not threading.main_thread():
            logger.debug("Not on main thread, skipping signal handlers")
            return

        def shutdown_handler(signum, frame):
            signal_name = signal.Signals(signum).name
            logger.info(f"Received {signal_name}, initiating shutdown...")
            self.shutdown()

        self._original_handlers[signal.SIGTERM] = signal.signal(signal.SIGTERM, shutdown_handler)
        self._original_handlers[signal.SIGINT] = signal.signal(signal.SIGINT, shutdown_handler)

    def _restore_signals(self):
        for sig, handler in self._original_handlers.items():
            signal.signal(sig, handler)
        self._original_handlers.clear()

    def start(self, connection_handler: Callable[[Connection], None]):
        """
        Bind, listen and run the accept loop. BLOCKS until shutdown().

        Raises:
            OSError: If the address cannot be bound. Fatal: nothing has
                been served yet.
        """
        self._socket = self._create_socket()

        try:
            self._socket.bind((self.config.host, self.config.port))
        except OSError as e:
            logger.error(f"Failed to bind to {self.config.host}:{self.config.port}: {e}")
            self._socket.close()
            self._socket = None
            raise

        self._socket.listen(self.config.backlog)
        self._bound_address = self._socket.getsockname()[:2]

        self._running = True
        self._setup_signals()

        host, port = self.address
        logger.info(f"Server started on port {port} ({host})")
        self._ready_event.set()

        try:
            self._accept_loop(connection_handler)
        finally:
            self._cleanup()

    def _accept_loop(self, connection_handler: Callable[[Connection], None]):
        while self._running:
            try:
                client_socket, client_address = self._socket.accept()
            except socket.timeout:
                continue  # Poll the running flag
            except OSError as e:
                if not self._running:
                    break  # Listening socket closed by shutdown
                # Per-connection failure (e.g. client reset during handshake)
                logger.error(f"Accept error: {e}")
                continue

            logger.debug(f"Accepted connection from {client_address[0]}:{client_address[1]}")

            conn = Connection(
                socket=client_socket,
                address=client_address,
                buffer_size=self.config.buffer_size,
                timeout=self.config.timeout,
            )

            # Synchronous: the next accept() waits for this to finish
            connection_handler(conn)

    def shutdown(self):
        """Stop the accept loop. Idempotent, callable from any thread."""
        if self._running:
            logger.info("Shutting down socket server...")
        self._running = False

    def _cleanup(self):
        self._restore_signals()

        if self._socket:
            try:
                self._socket.close()
            except OSError:
                pass
            self._socket = None

        self._ready_event.clear()
        logger.info("Socket server stopped")

    def wait_until_ready(self, timeout: Optional[float] = None) -> bool:
        """Block until the socket is listening. Returns False on timeout."""
        return self._ready_event.wait(timeout)

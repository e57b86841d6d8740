"""
=============================================================================
CRUDSERVER - A Users CRUD API on a Hand-Rolled HTTP Server
=============================================================================

A teaching-sized REST service: raw TCP sockets, literal-prefix routing and
one SQL table. No framework, so every step of a request is visible.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   socket bytes                                                       │
    │        │                                                             │
    │        ▼                                                             │
    │   SocketServer ──► Connection (one recv, 1024 bytes)                 │
    │        │                                                             │
    │        ▼                                                             │
    │   RawRequest ──► LoggingMiddleware ──► Router (first prefix match)   │
    │                                          │                           │
    │                                          ▼                           │
    │                                   UserHandlers ──► UserStore (SQL)   │
    │                                          │                           │
    │        ┌─────────────────────────────────┘                           │
    │        ▼                                                             │
    │   status line + body ──► socket bytes                                │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    crudserver/
    ├── __init__.py          # This file - package exports
    ├── __main__.py          # CLI entry point (python -m crudserver)
    ├── app.py               # create_app() / serve(): wiring + schema init
    ├── server.py            # HTTPServer: read → route → write
    ├── config.py            # ServerConfig dataclass
    ├── core/
    │   ├── socket_server.py # Sequential accept loop
    │   └── connection.py    # Single-read connection wrapper
    ├── http/
    │   ├── request.py       # RawRequest: id and body extraction
    │   ├── response.py      # HTTPResponse: status line + body
    │   ├── router.py        # Ordered literal-prefix routes
    │   └── status_codes.py  # The three status lines
    ├── middleware/
    │   ├── base.py          # Middleware + pipeline
    │   └── logging.py       # Access log
    ├── store/
    │   ├── base.py          # UserStore interface + errors
    │   ├── sql.py           # SQLAlchemy Core implementation
    │   └── memory.py        # In-memory implementation
    ├── users/
    │   ├── models.py        # User record
    │   └── handlers.py      # CRUD handlers
    └── todolist/
        └── models.py        # Todo-list payload records

=============================================================================
QUICK START
=============================================================================

    DATABASE_URL=sqlite:///users.db python -m crudserver

    curl -X POST localhost:8080/users -d '{"name":"Alice","email":"a@x.com"}'
    curl localhost:8080/users
    curl localhost:8080/users/1
    curl -X PUT localhost:8080/users/1 -d '{"name":"Al","email":"al@x.com"}'
    curl -X DELETE localhost:8080/users/1

=============================================================================
"""

__version__ = "1.0.0"

from .config import ServerConfig, ConfigError
from .server import HTTPServer
from .app import create_app, serve

__all__ = ["HTTPServer", "ServerConfig", "ConfigError", "create_app", "serve", "__version__"]

"""
=============================================================================
APPLICATION ASSEMBLY
=============================================================================

Builds the users CRUD server from a ServerConfig:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   ServerConfig ──► SQLUserStore.from_url(database_url, db_pool)      │
    │        │                    │                                        │
    │        │                    └──► init_schema()   (fatal on failure)  │
    │        ▼                                                             │
    │   HTTPServer ◄── LoggingMiddleware                                   │
    │        ▲                                                             │
    │        └─────── UserHandlers(store).register(router)                 │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

The schema is created BEFORE the socket is bound: the server never
accepts a connection it could not serve.

=============================================================================
"""

import logging
from typing import Optional

from .config import ServerConfig
from .middleware import LoggingMiddleware
from .server import HTTPServer, configure_logging
from .store import SQLUserStore, UserStore
from .users.handlers import UserHandlers


logger = logging.getLogger(__name__)


def create_app(config: ServerConfig, store: Optional[UserStore] = None) -> HTTPServer:
    """
    Build a server with the users routes registered.

    Args:
        config: Server configuration.
        store: Data store to use. Defaults to a SQLUserStore built from
            config.database_url and config.db_pool.
    """
    if store is None:
        store = SQLUserStore.from_url(config.database_url, pool=config.db_pool)

    server = HTTPServer(config)
    server.use(LoggingMiddleware(log_format=config.log_format))
    UserHandlers(store).register(server.router)
    return server


def serve(config: ServerConfig, store: Optional[UserStore] = None) -> None:
    """
    Initialize the schema, then run the server until stopped.

    Raises:
        ConfigError: Invalid configuration.
        StoreError: Schema could not be created (includes StoreUnavailable).
        OSError: Address could not be bound.
    """
    config.validate()
    configure_logging(config.log_level)

    if store is None:
        store = SQLUserStore.from_url(config.database_url, pool=config.db_pool)

    try:
        logger.info("Initializing database schema")
        store.init_schema()
        server = create_app(config, store)
        server.run()
    finally:
        store.close()

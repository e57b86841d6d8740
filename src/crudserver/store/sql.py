"""
=============================================================================
SQL USER STORE (SQLAlchemy Core)
=============================================================================

Persists users in a single relational table:

    CREATE TABLE IF NOT EXISTS users (
        id    SERIAL PRIMARY KEY,      -- INTEGER PRIMARY KEY on SQLite
        name  VARCHAR NOT NULL,
        email VARCHAR NOT NULL
    )

We use SQLAlchemy CORE (tables + expressions), not the ORM. Every
statement is built from the Table object, so values are always sent as
bound parameters, never pasted into SQL text.

=============================================================================
CONNECTION POLICY
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   pool="none"   (default)                                           │
    │   ──────────────                                                     │
    │   NullPool: every operation opens a NEW database connection and     │
    │   closes it when done.                                               │
    │                                                                      │
    │       request ──► connect ──► 1 statement ──► commit ──► close       │
    │                                                                      │
    │   + nothing shared between requests                                  │
    │   - one TCP + auth handshake per request                             │
    │                                                                      │
    │   pool="queue"                                                       │
    │   ──────────────                                                     │
    │   QueuePool: connections are checked out and returned.              │
    │   pool_pre_ping detects connections the database dropped.           │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Each operation runs in its own short transaction (engine "begin once"),
which is the same as auto-commit for a single statement.

=============================================================================
"""

import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional

from sqlalchemy import (
    Column,
    Integer,
    MetaData,
    String,
    Table,
    create_engine,
    delete,
    insert,
    select,
    update,
)
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import NullPool
from sqlalchemy.schema import CreateTable

from ..users.models import User
from .base import StoreError, StoreUnavailable, UserStore


logger = logging.getLogger(__name__)


metadata = MetaData()

users_table = Table(
    "users",
    metadata,
    # Integer primary key renders as SERIAL on PostgreSQL
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String, nullable=False),
    Column("email", String, nullable=False),
)


def create_store_engine(database_url: str, pool: str = "none") -> Engine:
    """
    Build an Engine for the given connection policy.

    Creating an Engine does not connect; the first connection happens on
    the first operation (or in init_schema()).
    """
    if pool == "none":
        return create_engine(database_url, poolclass=NullPool)
    if pool == "queue":
        return create_engine(database_url, pool_pre_ping=True)
    raise ValueError(f"Unknown pool policy: {pool!r}")


class SQLUserStore(UserStore):
    """
    UserStore backed by any database SQLAlchemy can reach.

    Usage:
        store = SQLUserStore.from_url("postgresql://localhost/postgres")
        store.init_schema()
        user_id = store.create(User(name="Alice", email="a@x.com"))
    """

    def __init__(self, engine: Engine):
        self._engine = engine

    @classmethod
    def from_url(cls, database_url: str, pool: str = "none") -> "SQLUserStore":
        return cls(create_store_engine(database_url, pool))

    @property
    def engine(self) -> Engine:
        return self._engine

    @contextmanager
    def _connect(self) -> Iterator[Connection]:
        """
        Connection + transaction for ONE operation.

        Maps driver errors onto the store's own exceptions:
        - connect() fails          → StoreUnavailable
        - the statement fails      → StoreError (transaction rolled back)
        """
        try:
            conn = self._engine.connect()
        except SQLAlchemyError as e:
            logger.warning(f"Database connection failed: {e}")
            raise StoreUnavailable(str(e)) from e

        try:
            with conn.begin():
                yield conn
        except SQLAlchemyError as e:
            logger.warning(f"Database statement failed: {e}")
            raise StoreError(str(e)) from e
        finally:
            conn.close()

    # =========================================================================
    # SCHEMA
    # =========================================================================

    def init_schema(self) -> None:
        """
        Create the users table if it does not exist.

        Idempotent. Raises StoreUnavailable/StoreError on failure; the
        caller treats either as fatal.
        """
        with self._connect() as conn:
            conn.execute(CreateTable(users_table, if_not_exists=True))
        logger.info("DB schema ready")

    # =========================================================================
    # CRUD
    # =========================================================================

    def create(self, user: User) -> int:
        with self._connect() as conn:
            result = conn.execute(
                insert(users_table).values(name=user.name, email=user.email)
            )
            return result.inserted_primary_key[0]

    def get_by_id(self, user_id: int) -> Optional[User]:
        with self._connect() as conn:
            row = conn.execute(
                select(users_table.c.id, users_table.c.name, users_table.c.email)
                .where(users_table.c.id == user_id)
            ).first()
        return User.from_row(row) if row is not None else None

    def get_all(self) -> List[User]:
        with self._connect() as conn:
            rows = conn.execute(
                select(users_table.c.id, users_table.c.name, users_table.c.email)
                .order_by(users_table.c.id)
            ).all()
        return [User.from_row(row) for row in rows]

    def update_by_id(self, user_id: int, user: User) -> int:
        with self._connect() as conn:
            result = conn.execute(
                update(users_table)
                .where(users_table.c.id == user_id)
                .values(name=user.name, email=user.email)
            )
            return result.rowcount

    def delete_by_id(self, user_id: int) -> int:
        with self._connect() as conn:
            result = conn.execute(
                delete(users_table).where(users_table.c.id == user_id)
            )
            return result.rowcount

    def close(self) -> None:
        """Dispose the engine (closes pooled connections, if any)."""
        self._engine.dispose()

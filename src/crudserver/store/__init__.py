"""
Data stores for users.

    from crudserver.store import SQLUserStore, InMemoryUserStore
"""

from .base import UserStore, StoreError, StoreUnavailable
from .memory import InMemoryUserStore
from .sql import SQLUserStore, create_store_engine, users_table

__all__ = [
    "UserStore",
    "StoreError",
    "StoreUnavailable",
    "InMemoryUserStore",
    "SQLUserStore",
    "create_store_engine",
    "users_table",
]

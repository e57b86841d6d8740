"""
=============================================================================
DATA STORE INTERFACE
=============================================================================

The request handlers never talk to a database driver directly. They talk
to a UserStore, a capability set of five operations:

    ┌──────────────────┬────────────────────────────────────────────────┐
    │ Operation        │ Returns                                        │
    ├──────────────────┼────────────────────────────────────────────────┤
    │ create(user)     │ id assigned by the store                       │
    │ get_by_id(id)    │ User, or None if there is no such row          │
    │ get_all()        │ list of Users, ordered by id (may be empty)    │
    │ update_by_id(..) │ number of rows changed (0 or 1)                │
    │ delete_by_id(id) │ number of rows removed (0 or 1)                │
    └──────────────────┴────────────────────────────────────────────────┘

Two kinds of failure, because the HTTP layer answers them differently:

    StoreUnavailable   could not even get a connection   → 500
    StoreError         connected, but the statement failed

Implementations:
    SQLUserStore       SQLAlchemy Core, any SQLAlchemy database URL
    InMemoryUserStore  dict + lock, for tests and local demos

=============================================================================
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..users.models import User


class StoreError(Exception):
    """A data store operation failed after a connection was established."""


class StoreUnavailable(StoreError):
    """The data store could not be reached."""


class UserStore(ABC):
    """Abstract capability set for persisting users."""

    @abstractmethod
    def create(self, user: User) -> int:
        """Insert a user (its id is ignored) and return the new id."""

    @abstractmethod
    def get_by_id(self, user_id: int) -> Optional[User]:
        """Return the user with this id, or None."""

    @abstractmethod
    def get_all(self) -> List[User]:
        """Return every user, ordered by id."""

    @abstractmethod
    def update_by_id(self, user_id: int, user: User) -> int:
        """Overwrite name and email of one user. Returns rows affected."""

    @abstractmethod
    def delete_by_id(self, user_id: int) -> int:
        """Delete one user. Returns rows affected."""

    def init_schema(self) -> None:
        """Create backing storage if needed. No-op by default."""

    def close(self) -> None:
        """Release resources held by the store. No-op by default."""

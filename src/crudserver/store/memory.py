"""
In-memory UserStore.

Behaves like the SQL store (ids start at 1 and are never reused), keeps
everything in a dict. A lock makes each operation atomic, so one instance
can be shared between threads.
"""

import threading
from typing import Dict, List, Optional

from ..users.models import User
from .base import UserStore


class InMemoryUserStore(UserStore):

    def __init__(self):
        self._users: Dict[int, User] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def create(self, user: User) -> int:
        with self._lock:
            user_id = self._next_id
            self._next_id += 1
            self._users[user_id] = User(id=user_id, name=user.name, email=user.email)
            return user_id

    def get_by_id(self, user_id: int) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            # Return a copy so callers can't mutate stored state
            return User(id=user.id, name=user.name, email=user.email) if user else None

    def get_all(self) -> List[User]:
        with self._lock:
            return [
                User(id=u.id, name=u.name, email=u.email)
                for _, u in sorted(self._users.items())
            ]

    def update_by_id(self, user_id: int, user: User) -> int:
        with self._lock:
            if user_id not in self._users:
                return 0
            self._users[user_id] = User(id=user_id, name=user.name, email=user.email)
            return 1

    def delete_by_id(self, user_id: int) -> int:
        with self._lock:
            return 1 if self._users.pop(user_id, None) is not None else 0

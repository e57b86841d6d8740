"""
Users resource.

    models.py    User record and JSON mapping
    handlers.py  CRUD handlers and their routes (import explicitly:
                 ``from crudserver.users.handlers import UserHandlers``)
"""

from .models import User

__all__ = ["User"]

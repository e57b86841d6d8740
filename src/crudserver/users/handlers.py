"""
=============================================================================
USERS CRUD HANDLERS
=============================================================================

Five handlers, one per route. Each one does at most ONE data store call and
turns the outcome into one of three responses.

=============================================================================
ROUTE TABLE (order matters, first match wins)
=============================================================================

    ┌───┬───────────┬───────────┬──────────────┬───────────────────────────┐
    │ # │ Method    │ Prefix    │ Handler      │ Success body              │
    ├───┼───────────┼───────────┼──────────────┼───────────────────────────┤
    │ 1 │ POST      │ /users    │ create_user  │ User created              │
    │ 2 │ GET       │ /users/   │ get_user     │ {"id":..,"name":..,...}   │
    │ 3 │ GET       │ /users    │ list_users   │ [{...}, ...]  (or [])     │
    │ 4 │ PUT       │ /users/   │ update_user  │ User updated              │
    │ 5 │ DELETE    │ /users    │ delete_user  │ User deleted              │
    └───┴───────────┴───────────┴──────────────┴───────────────────────────┘

=============================================================================
ERROR POLICY
=============================================================================

    ┌───────────────────────────────────────────┬─────┬─────────────────────┐
    │ What went wrong                           │ Code│ Body                │
    ├───────────────────────────────────────────┼─────┼─────────────────────┤
    │ id is not an integer                      │ 500 │ Error <verb>ing user│
    │ body is not a {name, email} JSON object   │ 500 │ Error <verb>ing user│
    │ database unreachable                      │ 500 │ Error <verb>ing user│
    │ no such row                               │ 404 │ User not found      │
    │ UPDATE statement failed                   │ 404 │ User not found      │
    │ GET-by-id query failed                    │ 404 │ User not found      │
    └───────────────────────────────────────────┴─────┴─────────────────────┘

A bad id and a dead database give the SAME response. So do "no row to
update" and "the UPDATE blew up". Clients can't tell these apart; that is
the API as it stands.

Any other exception escapes the handler and the server answers with its
generic 500.

=============================================================================
"""

import logging

from ..http import (
    HTTPResponse,
    RawRequest,
    RequestParseError,
    Router,
    internal_error,
    not_found,
    ok,
    ok_json,
)
from ..store.base import StoreError, StoreUnavailable, UserStore
from .models import User


logger = logging.getLogger(__name__)

USER_NOT_FOUND = "User not found"


def parse_user(request: RawRequest) -> User:
    """
    Decode the request body into a User.

    Raises:
        RequestParseError: If the body is not valid JSON or not User-shaped.
    """
    try:
        return User.from_dict(request.json())
    except RequestParseError:
        raise
    except ValueError as e:
        raise RequestParseError(str(e)) from e


class UserHandlers:
    """
    CRUD handlers bound to one UserStore.

    Usage:
        handlers = UserHandlers(SQLUserStore.from_url(url))
        handlers.register(router)
    """

    def __init__(self, store: UserStore):
        self.store = store

    def register(self, router: Router) -> Router:
        """Add the five users routes to a router, most specific first."""
        router.post("/users")(self.create_user)
        router.get("/users/")(self.get_user)
        router.get("/users")(self.list_users)
        router.put("/users/")(self.update_user)
        router.delete("/users")(self.delete_user)
        return router

    # =========================================================================
    # CREATE
    # =========================================================================

    def create_user(self, request: RawRequest) -> HTTPResponse:
        """
        POST /users

        The generated id is NOT returned to the client.
        """
        try:
            user = parse_user(request)
            user_id = self.store.create(user)
        except (RequestParseError, StoreUnavailable) as e:
            logger.info(f"Create failed: {e}")
            return internal_error("Error creating user")

        logger.debug(f"Created user {user_id}")
        return ok("User created")

    # =========================================================================
    # READ
    # =========================================================================

    def get_user(self, request: RawRequest) -> HTTPResponse:
        """GET /users/<id>"""
        try:
            user_id = request.user_id()
            user = self.store.get_by_id(user_id)
        except (RequestParseError, StoreUnavailable) as e:
            logger.info(f"Get failed: {e}")
            return internal_error("Error getting user")
        except StoreError:
            return not_found(USER_NOT_FOUND)

        if user is None:
            return not_found(USER_NOT_FOUND)
        return ok_json(user.to_dict())

    def list_users(self, request: RawRequest) -> HTTPResponse:
        """
        GET /users

        An empty table is a normal result: 200 with [].
        """
        try:
            users = self.store.get_all()
        except StoreUnavailable as e:
            logger.info(f"List failed: {e}")
            return internal_error("Error getting users")

        return ok_json([user.to_dict() for user in users])

    # =========================================================================
    # UPDATE
    # =========================================================================

    def update_user(self, request: RawRequest) -> HTTPResponse:
        """
        PUT /users/<id>

        Only name and email change; the id never does.
        """
        try:
            user_id = request.user_id()
            user = parse_user(request)
            updated = self.store.update_by_id(user_id, user)
        except (RequestParseError, StoreUnavailable) as e:
            logger.info(f"Update failed: {e}")
            return internal_error("Error updating user")
        except StoreError:
            # Some drivers report "0 rows matched" as an error too
            return not_found(USER_NOT_FOUND)

        if updated == 0:
            return not_found(USER_NOT_FOUND)
        return ok("User updated")

    # =========================================================================
    # DELETE
    # =========================================================================

    def delete_user(self, request: RawRequest) -> HTTPResponse:
        """DELETE /users/<id>"""
        try:
            user_id = request.user_id()
            deleted = self.store.delete_by_id(user_id)
        except (RequestParseError, StoreUnavailable) as e:
            logger.info(f"Delete failed: {e}")
            return internal_error("Error deleting user")

        if deleted == 0:
            return not_found(USER_NOT_FOUND)
        return ok("User deleted")

"""
=============================================================================
PREFIX ROUTER
=============================================================================

Maps a raw request to a handler by checking literal "METHOD /path"
prefixes, in registration order. First match wins.

=============================================================================
ROUTING FLOW
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                        ROUTING FLOW                                 │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   Incoming Request                                                   │
    │   "GET /users/7 HTTP/1.1\r\n..."                                     │
    │        │                                                             │
    │        ▼                                                             │
    │   ┌─────────────────────────────────────────────────────────────┐   │
    │   │  ROUTE TABLE (checked top to bottom)                         │   │
    │   │                                                              │   │
    │   │  1. POST   /users     → create_user                          │   │
    │   │  2. GET    /users/    → get_user        ← MATCH!             │   │
    │   │  3. GET    /users     → list_users      (never reached)      │   │
    │   │  4. PUT    /users/    → update_user                          │   │
    │   │  5. DELETE /users     → delete_user                          │   │
    │   └─────────────────────────────────────────────────────────────┘   │
    │        │                                                             │
    │        ▼                                                             │
    │   get_user(request)                                                  │
    │                                                                      │
    │   Nothing matched?  →  404 "NOT FOUND"                               │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
WHY ORDER MATTERS
=============================================================================

Prefixes overlap. "GET /users/7" starts with BOTH "GET /users/" and
"GET /users". If the list route came first it would swallow every
single-user request. The rule is the same as in any first-match router:

    Register the MORE SPECIFIC prefix BEFORE the less specific one.

Note that prefix matching is loose on purpose: "GET /usersXYZ" matches
"GET /users" and lists all users. That is how the API has always
behaved.

=============================================================================
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from .request import RawRequest
from .response import HTTPResponse, not_found


logger = logging.getLogger(__name__)

# Handler: takes the raw request, returns a response
Handler = Callable[[RawRequest], HTTPResponse]


@dataclass
class Route:
    """
    One row of the route table.

        Route(
            method="GET",             # Literal method token
            path="/users/",           # Literal path prefix
            handler=get_user,         # Called on match
            name="get_user",          # Optional, for listings/logs
        )
    """

    method: str
    path: str
    handler: Handler
    name: Optional[str] = None

    @property
    def prefix(self) -> str:
        """The literal text a request must start with."""
        return f"{self.method} {self.path}"

    def matches(self, request: RawRequest) -> bool:
        return request.startswith(self.prefix)


class Router:
    """
    Ordered table of (method, path prefix) → handler.

    Routes are registered with decorators, like the rest of the server:

        router = Router()

        @router.get("/users/")
        def get_user(request):
            ...

        @router.get("/users")
        def list_users(request):
            ...
    """

    def __init__(self):
        self._routes: List[Route] = []

    # =========================================================================
    # ROUTE REGISTRATION
    # =========================================================================

    def add_route(
        self,
        path: str,
        handler: Handler,
        method: str,
        name: Optional[str] = None
    ) -> Route:
        """
        Append a route to the END of the table.

        Args:
            path: Literal path prefix (e.g. "/users/")
            handler: Called with the RawRequest on match
            method: HTTP method token, matched case-sensitively
            name: Optional route name

        Returns:
            The registered Route object
        """
        route = Route(
            method=method.upper(),
            path=path,
            handler=handler,
            name=name or getattr(handler, "__name__", None),
        )
        self._routes.append(route)
        return route

    def route(
        self,
        path: str,
        method: str,
        name: Optional[str] = None
    ) -> Callable[[Handler], Handler]:
        """Decorator form of add_route()."""
        def decorator(handler: Handler) -> Handler:
            self.add_route(path, handler, method, name)
            return handler
        return decorator

    def get(self, path: str, name: Optional[str] = None) -> Callable[[Handler], Handler]:
        """Register a GET route."""
        return self.route(path, "GET", name)

    def post(self, path: str, name: Optional[str] = None) -> Callable[[Handler], Handler]:
        """Register a POST route."""
        return self.route(path, "POST", name)

    def put(self, path: str, name: Optional[str] = None) -> Callable[[Handler], Handler]:
        """Register a PUT route."""
        return self.route(path, "PUT", name)

    def delete(self, path: str, name: Optional[str] = None) -> Callable[[Handler], Handler]:
        """Register a DELETE route."""
        return self.route(path, "DELETE", name)

    # =========================================================================
    # ROUTE MATCHING
    # =========================================================================

    def match(self, request: RawRequest) -> Optional[Route]:
        """
        Return the first route whose prefix the request starts with.

        O(R) prefix checks for R routes; with five routes nothing fancier
        is worth it.
        """
        for route in self._routes:
            if route.matches(request):
                return route
        return None

    def handle(self, request: RawRequest) -> HTTPResponse:
        """
        Route a request to its handler.

        Returns:
            The handler's response, or 404 "NOT FOUND" if nothing matched.
            Exceptions raised by the handler propagate to the caller.
        """
        route = self.match(request)
        if route is None:
            logger.debug(f"No route for {request.request_line!r}")
            return not_found()
        return route.handler(request)

    # =========================================================================
    # UTILITY METHODS
    # =========================================================================

    def routes(self) -> List[Route]:
        """All registered routes, in match order."""
        return list(self._routes)

    def describe(self) -> str:
        """
        Human-readable route table, one route per line:

              1. POST     /users           create_user
              2. GET      /users/          get_user
        """
        lines = []
        for index, route in enumerate(self._routes, start=1):
            lines.append(f"  {index:2}. {route.method:8} {route.path:16} {route.name or ''}")
        return "\n".join(lines)

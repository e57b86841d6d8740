"""
=============================================================================
MIDDLEWARE BASE CLASSES
=============================================================================

Middleware wraps the router: it sees every request before routing and every
response after, without the handlers knowing about it.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   RawRequest ──► [ LoggingMiddleware ──► [ Router.handle ] ]         │
    │                                                    │                 │
    │   HTTPResponse ◄───────────────────────────────────┘                 │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

This is the Chain of Responsibility pattern. Each middleware gets the
request plus `next`, the rest of the chain, and decides whether and when
to call it.

=============================================================================
"""

from abc import ABC, abstractmethod
from typing import Callable, Iterator, List
import logging

from ..http.request import RawRequest
from ..http.response import HTTPResponse


logger = logging.getLogger(__name__)

# The next middleware, or the router at the end of the chain
NextHandler = Callable[[RawRequest], HTTPResponse]


class Middleware(ABC):
    """
    Abstract base class for middleware.

        class MyMiddleware(Middleware):
            def __call__(self, request, next):
                # before the handler
                response = next(request)   # MUST call next to continue
                # after the handler
                return response
    """

    @abstractmethod
    def __call__(self, request: RawRequest, next: NextHandler) -> HTTPResponse:
        """
        Process the request.

        Args:
            request: The incoming raw request
            next: The next handler in the chain (call this to continue!)

        Returns:
            HTTP response (either from next() or short-circuited)
        """

    @property
    def name(self) -> str:
        """Get the middleware name for logging."""
        return self.__class__.__name__


class MiddlewarePipeline:
    """
    Chains middleware around a final handler.

        pipeline = MiddlewarePipeline()
        pipeline.add(LoggingMiddleware())
        handler = pipeline.wrap(router.handle)

    First added = outermost: it sees the request first and the response
    last.
    """

    def __init__(self):
        self._middleware: List[Middleware] = []

    def add(self, middleware: Middleware) -> "MiddlewarePipeline":
        """Append middleware. Returns self for chaining."""
        self._middleware.append(middleware)
        logger.debug(f"Added middleware: {middleware.name}")
        return self

    def wrap(self, handler: NextHandler) -> NextHandler:
        """
        Wrap a handler with all middleware in the pipeline.

        Given [MW1, MW2] and handler, build MW1 → MW2 → handler by
        wrapping in REVERSE order.
        """
        current = handler
        for middleware in reversed(self._middleware):
            current = self._create_wrapped_handler(middleware, current)
        return current

    def _create_wrapped_handler(
        self,
        middleware: Middleware,
        next_handler: NextHandler
    ) -> NextHandler:
        # Closure over middleware and next_handler
        def wrapped(request: RawRequest) -> HTTPResponse:
            return middleware(request, next_handler)
        return wrapped

    def __len__(self) -> int:
        return len(self._middleware)

    def __iter__(self) -> Iterator[Middleware]:
        return iter(self._middleware)

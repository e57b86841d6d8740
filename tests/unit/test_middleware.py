"""
Unit tests for middleware and the access log.
"""

import json
import logging

from crudserver.core import SocketServer
from crudserver.http import internal_error, ok
from crudserver.middleware import LoggingMiddleware, Middleware, MiddlewarePipeline
from crudserver.server import HTTPServer

from conftest import make_request


class Tag(Middleware):
    """Appends its tag to the response body on the way out."""

    def __init__(self, tag):
        self.tag = tag

    def __call__(self, request, next):
        response = next(request)
        response.body += self.tag
        return response


class TestMiddlewarePipeline:

    def test_first_added_runs_outermost(self):
        pipeline = MiddlewarePipeline().add(Tag("a")).add(Tag("b"))
        handler = pipeline.wrap(lambda request: ok(""))

        # "b" wraps the handler directly, so it appends first
        assert handler(make_request("GET / HTTP/1.1")).body == "ba"

    def test_len_and_iter(self):
        first, second = Tag("a"), Tag("b")
        pipeline = MiddlewarePipeline().add(first).add(second)

        assert len(pipeline) == 2
        assert list(pipeline) == [first, second]

    def test_empty_pipeline_is_identity(self):
        handler = MiddlewarePipeline().wrap(lambda request: ok("x"))
        assert handler(make_request("GET / HTTP/1.1")).body == "x"

    def test_name(self):
        assert Tag("a").name == "Tag"


class TestLoggingMiddleware:

    def test_text_format(self, caplog):
        middleware = LoggingMiddleware()

        with caplog.at_level(logging.INFO, logger="crudserver.access"):
            middleware(make_request("GET /users HTTP/1.1\r\n\r\n"), lambda r: ok("[]"))

        message = caplog.records[-1].getMessage()
        assert message.startswith("127.0.0.1 - - [")
        assert '"GET /users" 200 2 ' in message

    def test_json_format(self, caplog):
        middleware = LoggingMiddleware(log_format="json")

        with caplog.at_level(logging.INFO, logger="crudserver.access"):
            middleware(make_request("GET /users/9 HTTP/1.1\r\n\r\n"), lambda r: internal_error("x"))

        entry = json.loads(caplog.records[-1].getMessage())
        assert entry["method"] == "GET"
        assert entry["path"] == "/users/9"
        assert entry["status_code"] == 500
        assert entry["client_ip"] == "127.0.0.1"

    def test_skip_paths(self, caplog):
        middleware = LoggingMiddleware(skip_paths=["/users"])

        with caplog.at_level(logging.INFO, logger="crudserver.access"):
            response = middleware(make_request("GET /users HTTP/1.1"), lambda r: ok("[]"))

        assert response.body == "[]"
        assert not [r for r in caplog.records if r.name == "crudserver.access"]

    def test_errors_are_logged_and_reraised(self, caplog):
        middleware = LoggingMiddleware()

        def boom(request):
            raise RuntimeError("boom")

        with caplog.at_level(logging.ERROR, logger="crudserver.access"):
            try:
                middleware(make_request("GET /boom HTTP/1.1"), boom)
            except RuntimeError:
                pass
            else:
                raise AssertionError("exception was swallowed")

        assert "Request failed" in caplog.records[-1].getMessage()


class TestHTTPServerHandling:

    def test_handle_request_without_running(self, config):
        server = HTTPServer(config)

        @server.get("/boom")
        def boom(request):
            raise ValueError("boom")

        response = server.handle_request(make_request("GET /boom HTTP/1.1"))
        assert response.body == "Internal Server Error"

    def test_unmatched(self, config):
        server = HTTPServer(config)
        assert server.handle_request(make_request("GET / HTTP/1.1")).body == "NOT FOUND"


class TestSocketServer:

    def test_not_running_before_start(self, config):
        server = SocketServer(config)

        assert not server.is_running
        assert server.address == ("127.0.0.1", 0)
        assert not server.wait_until_ready(timeout=0.01)

"""
Router tests: dispatch priority, path-shape errors, custom routes.
"""

import pytest

from raw_http_server.core.errors import MalformedRoutePath, UnsupportedMethod
from raw_http_server.core.request import ParsedRequest
from raw_http_server.core.router import (
    Router,
    default_router,
    Echo,
    UserAgent,
    FileGet,
    FilePost,
    Exists,
    NotFound,
)


def make_request(method, path, body=b""):
    return ParsedRequest(method=method, path=path, version="HTTP/1.1", body=body)


@pytest.fixture
def router():
    return default_router()


class TestDefaultRoutes:

    def test_file_post(self, router):
        decision = router.route(make_request("POST", "/files/abc.txt", b"hi"))
        assert decision == FilePost("abc.txt", b"hi")

    def test_user_agent(self, router):
        assert router.route(make_request("GET", "/user-agent")) == UserAgent()

    def test_echo(self, router):
        assert router.route(make_request("GET", "/echo/hello")) == Echo("hello")

    def test_echo_empty_payload(self, router):
        assert router.route(make_request("GET", "/echo/")) == Echo("")

    def test_echo_is_not_percent_decoded(self, router):
        assert router.route(make_request("GET", "/echo/a%20b")) == Echo("a%20b")

    def test_file_get(self, router):
        assert router.route(make_request("GET", "/files/abc.txt")) == FileGet("abc.txt")

    def test_file_get_uses_second_segment_only(self, router):
        assert router.route(make_request("GET", "/files/a/b")) == FileGet("a")

    def test_root_is_exists_check(self, router):
        assert router.route(make_request("GET", "/")) == Exists("/")

    def test_other_get_is_exists_check(self, router):
        assert router.route(make_request("GET", "/index.html")) == Exists("/index.html")

    def test_post_elsewhere_is_not_found(self, router):
        assert router.route(make_request("POST", "/echo/x")) == NotFound()


class TestRouteErrors:

    @pytest.mark.parametrize("path", ["/echo", "/echo/a/b"])
    def test_echo_needs_three_segments(self, router, path):
        with pytest.raises(MalformedRoutePath):
            router.route(make_request("GET", path))

    @pytest.mark.parametrize("method", ["GET", "POST"])
    def test_files_without_name(self, router, method):
        with pytest.raises(MalformedRoutePath):
            router.route(make_request(method, "/files"))

    @pytest.mark.parametrize("method", ["PUT", "DELETE", "HEAD", "get"])
    def test_unsupported_method(self, router, method):
        with pytest.raises(UnsupportedMethod) as exc_info:
            router.route(make_request(method, "/echo/x"))
        assert exc_info.value.method == method


class TestRouterTable:

    def test_add_custom_route(self):
        router = Router()
        router.add("GET", "ping", lambda request, segments: Echo("pong"))

        assert router.route(make_request("GET", "/ping")) == Echo("pong")
        assert router.route(make_request("GET", "/echo/x")) == Exists("/echo/x")

    def test_add_rejects_unsupported_method(self):
        with pytest.raises(ValueError):
            Router().add("PUT", "files", lambda request, segments: NotFound())

    def test_lookup(self, router):
        assert router.lookup("GET", "echo") is not None
        assert router.lookup("POST", "echo") is None

"""Tests for geode.testing — TestClient and assertion helpers."""

import pytest

from geode.app import App
from geode.gemini.request import Request
from geode.gemini.response import Response
from geode.gemini.status import Status
from geode.middleware.protocol import Next
from geode.sessions import MemorySessionStore
from geode.testing import (
    TestClient,
    assert_body_contains,
    assert_body_not_contains,
    assert_status,
)


def _whoami(request: Request, response: Response, next: Next) -> Response:
    response.write(f"identity={request.identity} path={request.path}\n")
    return response


class TestClientRequests:
    def test_get_normalizes_path(self) -> None:
        app = App()
        app.add_handler("/me", _whoami)
        response = TestClient(app).get("me/")
        assert_status(response, Status.SUCCESS, "text/gemini")
        assert_body_contains(response, "path=/me")

    def test_default_and_override_identity(self) -> None:
        app = App()
        app.add_handler("/me", _whoami)
        client = TestClient(app, identity="alice")
        assert_body_contains(client.get("/me"), "identity=alice")
        assert_body_contains(client.get("/me", identity="bob"), "identity=bob")

    def test_sessions_persist_between_requests(self) -> None:
        store = MemorySessionStore()
        app = App(sessions=store)

        @app.route("/visit")
        def visit(request: Request, response: Response, next: Next) -> Response:
            assert request.session is not None
            request.session["n"] = request.session.get("n", 0) + 1
            response.write(str(request.session["n"]))
            return response

        client = TestClient(app, fingerprint="fp")
        client.get("/visit")
        assert client.get("/visit").body == "2"
        assert TestClient(app, fingerprint="other").get("/visit").body == "1"

    def test_raw(self) -> None:
        app = App()
        app.add_handler("/", _whoami)
        wire = TestClient(app).raw({"PATH_INFO": "/", "REMOTE_USER": "carol"})
        assert wire == b"20 text/gemini\r\nidentity=carol path=/\n"


class TestAssertions:
    def test_assert_status_failure_message(self) -> None:
        with pytest.raises(AssertionError, match="Expected status 20, got 51"):
            assert_status(Response(51, "-"), Status.SUCCESS)

    def test_assert_status_meta(self) -> None:
        with pytest.raises(AssertionError, match="Expected meta"):
            assert_status(Response(), 20, "text/plain")

    def test_body_contains(self) -> None:
        with pytest.raises(AssertionError, match="does not contain"):
            assert_body_contains(Response(body="abc"), "xyz")

    def test_body_not_contains(self) -> None:
        assert_body_not_contains(Response(body="abc"), "xyz")
        with pytest.raises(AssertionError, match="unexpectedly contains"):
            assert_body_not_contains(Response(body="abc"), "b")

"""Test client for geode applications.

Uses the same Request and Response types as production.
No wrapper translation layer, no environment variables.
"""

import io

from geode.app import App
from geode.gemini.request import Request
from geode.gemini.response import Response
from geode.sessions import bind_session, save_session


class TestClient:
    __test__ = False  # Tell pytest this is not a test class
    """Synchronous test client for geode applications.

    Builds Requests directly and dispatches them through the app, with
    sessions bound and saved exactly as ``App.run()`` does.

    Usage::

        client = TestClient(app)
        response = client.get("/page/1")
        assert response.status == Status.SUCCESS
    """

    __slots__ = ("app", "fingerprint", "identity")

    def __init__(self, app: App, *, identity: str = "", fingerprint: str = "") -> None:
        self.app = app
        self.identity = identity
        self.fingerprint = fingerprint

    def get(
        self,
        path: str,
        *,
        query: str = "",
        identity: str | None = None,
        fingerprint: str | None = None,
    ) -> Response:
        """Dispatch a request for *path*; ``query`` is taken as already decoded."""
        return self.request(self.build_request(path, query, identity, fingerprint))

    def raw(self, environ: dict[str, str]) -> bytes:
        """Run the app end to end against *environ* and return the wire bytes."""
        stream = io.BytesIO()
        self.app.run(environ, stream)
        return stream.getvalue()

    def build_request(
        self,
        path: str,
        query: str = "",
        identity: str | None = None,
        fingerprint: str | None = None,
    ) -> Request:
        fp = self.fingerprint if fingerprint is None else fingerprint
        return Request(
            path="/" + path.strip("/"),
            query=query,
            identity=self.identity if identity is None else identity,
            fingerprint=fp,
            session=bind_session(fp, self.app.sessions),
        )

    def request(self, request: Request) -> Response:
        """Dispatch a prepared *request* and save its session."""
        response = self.app.dispatch(request)
        save_session(request.session, self.app.sessions)
        return response

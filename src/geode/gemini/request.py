"""Immutable Gemini request.

One request per invocation, read from the CGI environment the gateway
prepared. Nothing about it changes once it exists; the captures of the
matched route are attached by making a copy.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from urllib.parse import unquote

from geode.routing.params import Params
from geode.routing.pattern import normalize_path
from geode.sessions import Session, SessionStore, bind_session

# CGI variables the gateway sets for each request
PATH_VAR = "PATH_INFO"
QUERY_VAR = "QUERY_STRING"
IDENTITY_VAR = "REMOTE_USER"
FINGERPRINT_VAR = "TLS_CLIENT_HASH"


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable Gemini request.

    ``path`` always starts with ``/`` and only ends with one when it is
    exactly ``/``. ``query`` is already percent-decoded. ``identity`` is
    whatever principal the transport layer authenticated, if any.
    """

    path: str = "/"
    query: str = ""
    identity: str = ""
    fingerprint: str = ""
    params: Params = field(default_factory=Params)
    session: Session | None = field(default=None, compare=False)

    # -- Computed properties --

    @property
    def input(self) -> str:
        """User input sent in reply to a 10/11 prompt (the query)."""
        return self.query

    @property
    def has_identity(self) -> bool:
        return bool(self.identity)

    @property
    def has_session(self) -> bool:
        return self.session is not None

    def with_params(self, params: Params) -> Request:
        """Return a copy carrying the captures of a route match."""
        return replace(self, params=params)

    # -- Factory --

    @classmethod
    def from_environ(
        cls,
        environ: Mapping[str, str],
        *,
        sessions: SessionStore | None = None,
    ) -> Request:
        """Create a Request from CGI environment variables.

        Missing variables read as empty strings. A session is bound only
        when the client sent a certificate and *sessions* is given.
        """
        fingerprint = environ.get(FINGERPRINT_VAR, "")
        return cls(
            path=normalize_path(environ.get(PATH_VAR, "")),
            query=unquote(environ.get(QUERY_VAR, "")),
            identity=environ.get(IDENTITY_VAR, ""),
            fingerprint=fingerprint,
            session=bind_session(fingerprint, sessions),
        )

"""Gemini response accumulator.

A fresh Response is handed to the first handler of a route's stack and
passed down the chain; every handler may set the header or append to
the body. The server writes it out exactly once::

    20 text/gemini\\r\\n
    # body bytes
"""

from __future__ import annotations

from geode.gemini.status import Status

DEFAULT_META = "text/gemini"


class Response:
    """Status, meta, and an append-only body buffer.

    ``meta`` is the MIME type on success, the prompt for input statuses,
    the target URL for redirects, and the error message otherwise.
    """

    __slots__ = ("_chunks", "_status", "meta")

    def __init__(
        self,
        status: int = Status.SUCCESS,
        meta: str = DEFAULT_META,
        body: str = "",
    ) -> None:
        self._status = Status(status)
        self.meta = meta
        self._chunks: list[str] = [body] if body else []

    # -- Factories --

    @classmethod
    def input(cls, prompt: str, *, sensitive: bool = False) -> Response:
        """Ask the client for a line of input (10, or 11 when *sensitive*)."""
        return cls(Status.SENSITIVE_INPUT if sensitive else Status.INPUT, prompt)

    @classmethod
    def redirect(cls, url: str, *, permanent: bool = False) -> Response:
        """Redirect the client to *url* (30, or 31 when *permanent*)."""
        return cls(Status.REDIRECT_PERMANENT if permanent else Status.REDIRECT_TEMPORARY, url)

    @classmethod
    def failure(cls, status: int, meta: str) -> Response:
        """A response with no body, for error and status-only replies."""
        return cls(status, meta)

    # -- Header --

    @property
    def status(self) -> Status:
        return self._status

    @status.setter
    def status(self, value: int) -> None:
        self._status = Status(value)

    def set_header(self, status: int, meta: str) -> None:
        """Set status and meta together.

        Raises ``ValueError`` if *status* is not a Gemini status code.
        """
        self.status = status
        self.meta = meta

    @property
    def header(self) -> str:
        """The status line as written to the wire."""
        return f"{self._status.value} {self.meta}\r\n"

    # -- Body --

    def write(self, text: str) -> None:
        """Append *text* to the body."""
        if text:
            self._chunks.append(text)

    def set_body(self, text: str) -> None:
        """Replace the body with *text*."""
        self._chunks = [text] if text else []

    @property
    def body(self) -> str:
        if len(self._chunks) > 1:
            # Collapse so repeated reads stay cheap
            self._chunks = ["".join(self._chunks)]
        return self._chunks[0] if self._chunks else ""

    @property
    def body_bytes(self) -> bytes:
        return self.body.encode("utf-8")

    @property
    def text(self) -> str:
        """Alias of ``body``."""
        return self.body

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Response):
            return NotImplemented
        return (self.status, self.meta, self.body) == (other.status, other.meta, other.body)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Response(status={self._status.value}, meta={self.meta!r}, body={self.body!r})"

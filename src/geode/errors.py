"""Geode exception hierarchy.

Shared across Route, App, handler stacks, and the server boundary so
every module raises and catches the same types.
"""

from dataclasses import dataclass

from geode.gemini.status import Status


class GeodeError(Exception):
    """Base for all geode-specific errors."""


class ConfigurationError(GeodeError):
    """Raised when app configuration is invalid.

    Invalid route patterns and registration after the app is frozen
    both surface here, at registration time rather than per request.
    """


@dataclass(frozen=True, slots=True)
class GeminiError(GeodeError):
    """An error that maps directly to a Gemini status line.

    Raised by handlers to end the request with a specific status. The
    server boundary turns it into a response instead of a failure.
    """

    status: int
    meta: str = ""

    def __post_init__(self) -> None:
        # Reject codes the protocol does not define
        Status(self.status)

    def __str__(self) -> str:
        if self.meta:
            return f"{self.status}: {self.meta}"
        return str(self.status)


class BadRequest(GeminiError):  # noqa: N818 — named after the status
    """59 — the request could not be understood."""

    def __init__(self, meta: str = "Bad request") -> None:
        super().__init__(status=Status.BAD_REQUEST, meta=meta)


class NotFound(GeminiError):  # noqa: N818 — named after the status
    """51 — the requested resource does not exist."""

    def __init__(self, meta: str = "Not found") -> None:
        super().__init__(status=Status.NOT_FOUND, meta=meta)


class Gone(GeminiError):  # noqa: N818 — named after the status
    """52 — the resource is gone for good."""

    def __init__(self, meta: str = "Gone") -> None:
        super().__init__(status=Status.GONE, meta=meta)


class CertificateRequired(GeminiError):  # noqa: N818 — named after the status
    """60 — a client certificate is needed to access the resource."""

    def __init__(self, meta: str = "Client certificate required") -> None:
        super().__init__(status=Status.CLIENT_CERTIFICATE_REQUIRED, meta=meta)

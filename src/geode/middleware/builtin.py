"""Built-in stack handlers for common capsule gates.

Add them to a route after its endpoint so they run first::

    app.add_handler("/search", search).add_to_stack(RequireInput("Search for?"))
    app.add_handler("/account", account).add_to_stack(RequireSession())
"""

from dataclasses import dataclass

from geode.gemini.request import Request
from geode.gemini.response import Response
from geode.gemini.status import Status
from geode.middleware.protocol import Next


@dataclass(frozen=True, slots=True)
class RequireInput:
    """Prompt for input (10, or 11 for passwords) until a query arrives."""

    prompt: str
    sensitive: bool = False

    def __call__(self, request: Request, response: Response, next: Next) -> Response:
        if request.input:
            return next(request, response)
        status = Status.SENSITIVE_INPUT if self.sensitive else Status.INPUT
        response.set_header(status, self.prompt)
        return response


@dataclass(frozen=True, slots=True)
class RequireIdentity:
    """Demand a client certificate (60) when the request carries no identity.

    Either a transport-authenticated ``identity`` or a certificate
    ``fingerprint`` is enough to pass.
    """

    meta: str = "Client certificate required"

    def __call__(self, request: Request, response: Response, next: Next) -> Response:
        if request.identity or request.fingerprint:
            return next(request, response)
        response.set_header(Status.CLIENT_CERTIFICATE_REQUIRED, self.meta)
        return response


@dataclass(frozen=True, slots=True)
class RequireSession:
    """Demand a client certificate (60) when no session is active."""

    meta: str = "Client certificate required"

    def __call__(self, request: Request, response: Response, next: Next) -> Response:
        if request.session is not None:
            return next(request, response)
        response.set_header(Status.CLIENT_CERTIFICATE_REQUIRED, self.meta)
        return response

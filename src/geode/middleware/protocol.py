"""Handler protocol and Next type alias.

Every entry in a route's stack is any callable matching::

    def my_handler(request: Request, response: Response, next: Next) -> Response: ...

No base class required. The framework checks the shape, not the lineage.

``next`` runs the handler added before this one. Returning without
calling it ends the chain here; calling it when nothing is left simply
hands back the response it was given.
"""

from collections.abc import Callable
from typing import Protocol

from geode.gemini.request import Request
from geode.gemini.response import Response

# The rest of the stack, below the running handler
type Next = Callable[[Request, Response], Response]


class Handler(Protocol):
    """Protocol for stack handlers.

    Accepts both functions and callable objects::

        # Function handler
        def page(request: Request, response: Response, next: Next) -> Response:
            response.write(f"# Page {request.params[0]}\\n")
            return response

        # Class handler
        class RequireAdmin:
            def __call__(self, request: Request, response: Response, next: Next) -> Response:
                if request.identity != "admin":
                    response.set_header(Status.CERTIFICATE_NOT_AUTHORISED, "Admins only")
                    return response
                return next(request, response)
    """

    def __call__(self, request: Request, response: Response, next: Next) -> Response: ...

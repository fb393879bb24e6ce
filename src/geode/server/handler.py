"""Request dispatch — the single last-chance handler.

Tries each route in registration order, runs the first match's stack,
and always comes back with a Response: the route's own, a not-found
reply when nothing matched, or a temporary failure when the stack
raised.
"""

import contextlib
import io
import logging
from collections.abc import Iterator, Sequence

from geode.config import AppConfig
from geode.errors import GeminiError
from geode.gemini.request import Request
from geode.gemini.response import Response
from geode.routing.route import Route
from geode.server.errors import handle_gemini_error, handle_internal_error, not_found

logger = logging.getLogger("geode.server")


@contextlib.contextmanager
def _captured_output(enabled: bool) -> Iterator[io.StringIO]:
    """Collect anything handlers print while the stack runs."""
    buffer = io.StringIO()
    if not enabled:
        yield buffer
        return
    with contextlib.redirect_stdout(buffer):
        yield buffer


def match_route(routes: Sequence[Route], request: Request) -> tuple[Route, Request] | None:
    """Find the first route matching ``request.path``.

    Returns the route and a copy of the request carrying its captures.
    """
    for route in routes:
        params = route.match(request.path)
        if params is not None:
            return route, request.with_params(params)
    return None


def handle_request(
    request: Request,
    routes: Sequence[Route],
    *,
    config: AppConfig,
) -> Response:
    """Process a single request through the route table."""
    with _captured_output(config.capture_output) as stray:
        try:
            found = match_route(routes, request)
            if found is None:
                response = not_found(request, config)
            else:
                route, matched = found
                response = route.execute(matched)
                if not isinstance(response, Response):
                    msg = (
                        f"Stack for route {route.pattern!r} returned "
                        f"{type(response).__name__}, expected Response"
                    )
                    raise TypeError(msg)
        except GeminiError as exc:
            response = handle_gemini_error(exc, request)
        except Exception as exc:
            response = handle_internal_error(exc, request, config)

    output = stray.getvalue()
    if output:
        logger.debug("Appending %d characters of handler output to %s", len(output), request.path)
        response.write(output)
    return response

"""Error containment for the dispatch boundary.

Maps GeminiError exceptions and unexpected failures to Response objects.
Nothing raised by handler code gets past this module.
"""

import logging

from geode.config import AppConfig
from geode.errors import GeminiError
from geode.gemini.request import Request
from geode.gemini.response import Response
from geode.gemini.status import Status

logger = logging.getLogger("geode.server")


def handle_gemini_error(exc: GeminiError, request: Request) -> Response:
    """A handler asked to end the request with a specific status."""
    logger.debug("%d %s: %s", exc.status, request.path, exc.meta)
    return Response.failure(exc.status, exc.meta or "-")


def handle_internal_error(exc: Exception, request: Request, config: AppConfig) -> Response:
    """Log the failure and answer with a fixed temporary failure.

    The exception text goes to the log only, never to the client.
    """
    logger.exception("%d %s", Status.TEMPORARY_FAILURE.value, request.path, exc_info=exc)
    return Response.failure(Status.TEMPORARY_FAILURE, config.failure_meta)


def not_found(request: Request, config: AppConfig) -> Response:
    """No route matched *request*."""
    logger.debug("%d %s: no matching route", Status.NOT_FOUND.value, request.path)
    return Response.failure(Status.NOT_FOUND, config.not_found_meta)

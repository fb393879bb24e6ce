"""Output channel — writes a finished Response to the gateway.

The wire format is positional: the status line must be the very first
bytes out, followed by the body and nothing else.
"""

import logging
from typing import BinaryIO

from geode.gemini.response import Response

logger = logging.getLogger("geode.server")


def _body_allowed(response: Response) -> bool:
    """Only success responses carry a body."""
    return response.status.is_success


def send_response(response: Response, stream: BinaryIO) -> None:
    """Write the status line, then the body, then flush."""
    body = response.body_bytes
    if body and not _body_allowed(response):
        logger.debug(
            "Sending %d-byte body with status %d", len(body), response.status.value
        )
    stream.write(response.header.encode("utf-8"))
    stream.write(body)
    stream.flush()

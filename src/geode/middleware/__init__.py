"""Stack handlers — Protocol-based, no inheritance required.

A stack handler is any callable matching:
    def handler(request: Request, response: Response, next: Next) -> Response

Built-in handlers:
    RequireIdentity -- 60 unless the client is identified
    RequireInput -- 10/11 prompt until a query is present
    RequireSession -- 60 unless a certificate session is active
"""

from geode.middleware.builtin import RequireIdentity, RequireInput, RequireSession
from geode.middleware.protocol import Handler, Next

__all__ = [
    "Handler",
    "Next",
    "RequireIdentity",
    "RequireInput",
    "RequireSession",
]

"""Route — a compiled path pattern bound to a handler stack.

The stack runs newest-first. Adding a handler wraps the ones already
there, the way middleware wraps an endpoint::

    route = app.add_handler(r"/admin/(.+)", show_page)   # runs last
    route.add_to_stack(load_user)                        # runs second
    route.add_to_stack(check_certificate)                # runs first
"""

from __future__ import annotations

import re

from geode.errors import ConfigurationError
from geode.gemini.request import Request
from geode.gemini.response import DEFAULT_META, Response
from geode.middleware.protocol import Handler
from geode.routing.params import Params
from geode.routing.pattern import compile_pattern


class _Next:
    """Continuation into the rest of a stack.

    Holds its own position, so a handler can call it more than once and
    concurrent executions of one route never share a cursor.
    """

    __slots__ = ("_index", "_stack")

    def __init__(self, stack: tuple[Handler, ...], index: int) -> None:
        self._stack = stack
        self._index = index

    def __call__(self, request: Request, response: Response) -> Response:
        if self._index < 0:
            return response
        handler = self._stack[self._index]
        result = handler(request, response, _Next(self._stack, self._index - 1))
        if result is None:
            # Handlers that only mutate may fall off the end
            return response
        return result


class Route:
    """A compiled pattern plus its handler stack.

    Created by ``App.add_handler()``; lives as long as the app.

    ``match()`` records the most recent captures on the route for the
    one-request-per-process model. The same captures also travel on
    ``request.params``, which is what handlers should read.
    """

    __slots__ = ("_frozen", "_parameters", "_stack", "default_meta", "pattern", "regex")

    def __init__(self, pattern: str, handler: Handler, *, default_meta: str = DEFAULT_META) -> None:
        self.pattern = pattern
        self.regex: re.Pattern[str] = compile_pattern(pattern)
        self.default_meta = default_meta
        self._stack: list[Handler] = [handler]
        self._parameters = Params()
        self._frozen = False

    # -- Stack --

    def add_to_stack(self, handler: Handler) -> Route:
        """Push *handler* onto the stack; it will run before the others.

        Returns the route so registrations can be chained.
        """
        if self._frozen:
            msg = (
                f"Cannot add handlers to route {self.pattern!r} after the app "
                "has started handling requests."
            )
            raise ConfigurationError(msg)
        self._stack.append(handler)
        return self

    but_first = add_to_stack

    @property
    def stack(self) -> tuple[Handler, ...]:
        """Handlers in registration order (the last one runs first)."""
        return tuple(self._stack)

    def freeze(self) -> None:
        """Refuse further stack changes."""
        self._frozen = True

    # -- Matching --

    def match(self, path: str) -> Params | None:
        """Match *path* in full against the pattern.

        Returns the captures on success and ``None`` otherwise; a prefix
        match never succeeds.
        """
        m = self.regex.fullmatch(path)
        if m is None:
            return None
        params = Params.from_match(m)
        self._parameters = params
        return params

    @property
    def parameters(self) -> Params:
        """Captures from the most recent successful ``match()``."""
        return self._parameters

    def get_parameters(self) -> Params:
        return self._parameters

    # -- Execution --

    def execute(self, request: Request) -> Response:
        """Run the stack against a fresh default response."""
        response = Response(meta=self.default_meta)
        stack = tuple(self._stack)
        return _Next(stack, len(stack) - 1)(request, response)

    def __repr__(self) -> str:
        return f"Route({self.pattern!r}, stack={len(self._stack)})"

"""Geode application class.

Mutable during setup (route registration, template filters).
Frozen when dispatch() or run() is first invoked.
"""

import logging
import os
import sys
import threading
from collections.abc import Callable, Mapping
from typing import Any, BinaryIO

from kida import Environment

from geode.config import AppConfig
from geode.errors import ConfigurationError
from geode.gemini.request import Request
from geode.gemini.response import Response
from geode.gemini.status import Status
from geode.middleware.protocol import Handler
from geode.routing.route import Route
from geode.server.handler import handle_request
from geode.server.sender import send_response
from geode.sessions import SessionStore, save_session
from geode.templating.integration import (
    bind_environment,
    create_environment,
    render_string,
    render_template,
)

session_logger = logging.getLogger("geode.sessions")


class App:
    """The geode application.

    Usage::

        app = App()

        @app.route(r"/page/(\\d+)")
        def page(request, response, next):
            response.write(f"# Page {request.params[0]}\\n")
            return response

        app.run()

    Routes are tried in registration order and the first match wins.

    Thread safety:
        Setup is single-threaded (decorators at import time). The freeze
        transition uses a Lock + double-check so exactly one thread
        compiles the app; afterwards the route table is a tuple and is
        never mutated.
    """

    __slots__ = (
        "_custom_kida_env",
        "_freeze_lock",
        "_frozen",
        "_kida_env",
        "_pending_routes",
        "_routes",
        "_template_filters",
        "_template_globals",
        "config",
        "sessions",
    )

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        sessions: SessionStore | None = None,
        kida_env: Environment | None = None,
    ) -> None:
        self.config: AppConfig = config or AppConfig()
        self.sessions: SessionStore | None = sessions
        self._pending_routes: list[Route] = []
        self._template_filters: dict[str, Callable[..., Any]] = {}
        self._template_globals: dict[str, Any] = {}
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()
        self._custom_kida_env: Environment | None = kida_env

        # Compiled state — set during _freeze()
        self._routes: tuple[Route, ...] = ()
        self._kida_env: Environment | None = None

    # -- Route registration --

    def add_handler(self, pattern: str, handler: Handler) -> Route:
        """Register *handler* for paths fully matching *pattern*.

        Returns the Route so more handlers can be stacked on it.
        Raises ``ConfigurationError`` if *pattern* is not a valid
        regular expression or the app is already frozen.
        """
        self._check_not_frozen()
        route = Route(pattern, handler, default_meta=self.config.default_meta)
        self._pending_routes.append(route)
        return route

    def route(self, pattern: str) -> Callable[[Handler], Handler]:
        """Register a route handler via decorator.

        Stack more handlers with ``app.routes[-1].add_to_stack()`` or
        use ``add_handler()`` directly when you need the Route.
        """

        def decorator(func: Handler) -> Handler:
            self.add_handler(pattern, func)
            return func

        return decorator

    @property
    def routes(self) -> tuple[Route, ...]:
        """Registered routes in priority order."""
        if self._frozen:
            return self._routes
        return tuple(self._pending_routes)

    # -- Template integration --

    def template_filter(
        self,
        name: str | None = None,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Register a kida template filter."""

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self._check_not_frozen()
            filter_name = name or func.__name__
            self._template_filters[filter_name] = func
            return func

        return decorator

    def template_global(
        self,
        name: str | None = None,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Register a kida template global."""

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self._check_not_frozen()
            global_name = name or func.__name__
            self._template_globals[global_name] = func
            return func

        return decorator

    def render(self, template_name: str, /, **context: Any) -> str:
        """Render a template from ``config.template_dir`` to a string.

        Usage inside a handler::

            response.write(app.render("index.gmi", posts=posts))
        """
        self._ensure_frozen()
        assert self._kida_env is not None
        return render_template(self._kida_env, template_name, context)

    def render_string(self, source: str, /, **context: Any) -> str:
        """Render a template from a source string."""
        self._ensure_frozen()
        assert self._kida_env is not None
        return render_string(self._kida_env, source, context)

    # -- Request handling --

    def dispatch(self, request: Request) -> Response:
        """Run *request* through the route table.

        Never raises for handler failures: they come back as a
        temporary-failure response.
        """
        self._ensure_frozen()
        return handle_request(request, self._routes, config=self.config)

    def run(
        self,
        environ: Mapping[str, str] | None = None,
        stream: BinaryIO | None = None,
    ) -> Response:
        """Handle the request for this process invocation.

        Reads the CGI environment (``os.environ`` by default), dispatches,
        saves the session, and writes the response to *stream*
        (``sys.stdout.buffer`` by default).

        If the session cannot be saved, the handler's response is replaced
        by a temporary failure: the client must not see a success for
        state that was lost.
        """
        self._ensure_frozen()
        request = Request.from_environ(
            os.environ if environ is None else environ,
            sessions=self.sessions,
        )
        response = self.dispatch(request)
        try:
            save_session(request.session, self.sessions)
        except Exception:
            session_logger.exception("Failed to save session for %s", request.path)
            response = Response.failure(Status.TEMPORARY_FAILURE, self.config.failure_meta)
        send_response(response, sys.stdout.buffer if stream is None else stream)
        return response

    # -- Freeze --

    def _ensure_frozen(self) -> None:
        """Compile the app on first use (thread-safe)."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Lock the route table and build the template environment."""
        for route in self._pending_routes:
            route.freeze()
        self._routes = tuple(self._pending_routes)

        if self._custom_kida_env is not None:
            bind_environment(
                self._custom_kida_env, self._template_filters, self._template_globals
            )
            self._kida_env = self._custom_kida_env
        else:
            self._kida_env = create_environment(
                self.config, self._template_filters, self._template_globals
            )

        self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started handling requests. "
                "Register routes and filters before calling dispatch() or run()."
            )
            raise ConfigurationError(msg)

"""Geode — a small application framework for Gemini capsules.

Runs once per request behind a CGI-style Gemini server: reads the
environment, matches the path against regex routes, runs the matched
route's handler stack, and writes ``<status> <meta>\\r\\n`` plus body.

Basic usage::

    from geode import App

    app = App()

    @app.route("/")
    def index(request, response, next):
        response.write("# Hello, Gemini!\\n")
        return response

    app.run()

Stacked handlers run newest-first::

    app.add_handler(r"/page/(\\d+)", show_page).add_to_stack(RequireSession())
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "BadRequest",
    "CertificateRequired",
    "ConfigurationError",
    "GeminiError",
    "GeodeError",
    "Gone",
    "Handler",
    "Next",
    "NotFound",
    "Params",
    "Request",
    "RequireIdentity",
    "RequireInput",
    "RequireSession",
    "Response",
    "Route",
    "Status",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import geode`` fast for one-shot CGI processes.
    """
    if name == "App":
        from geode.app import App

        return App

    if name == "AppConfig":
        from geode.config import AppConfig

        return AppConfig

    if name == "Request":
        from geode.gemini.request import Request

        return Request

    if name == "Response":
        from geode.gemini.response import Response

        return Response

    if name == "Status":
        from geode.gemini.status import Status

        return Status

    if name in ("Route", "Params"):
        from geode.routing import params as _params
        from geode.routing import route as _route

        return getattr(_route if name == "Route" else _params, name)

    if name in ("Handler", "Next", "RequireIdentity", "RequireInput", "RequireSession"):
        import geode.middleware as _mw

        return getattr(_mw, name)

    if name in (
        "BadRequest",
        "CertificateRequired",
        "ConfigurationError",
        "GeminiError",
        "GeodeError",
        "Gone",
        "NotFound",
    ):
        from geode import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)

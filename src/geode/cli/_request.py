"""``geode request`` — dispatch one simulated request.

Builds the same CGI environment a Gemini server would and runs the app
end to end, so the output is exactly what a client would receive.
"""

import argparse
import sys

from geode.cli import configure_logging
from geode.cli._resolve import resolve_app
from geode.gemini.request import FINGERPRINT_VAR, IDENTITY_VAR, PATH_VAR, QUERY_VAR


def build_environ(args: argparse.Namespace) -> dict[str, str]:
    """CGI variables for the simulated request."""
    environ = {PATH_VAR: args.path, QUERY_VAR: args.query}
    if args.identity:
        environ[IDENTITY_VAR] = args.identity
    if args.fingerprint:
        environ[FINGERPRINT_VAR] = args.fingerprint
    return environ


def run_request(args: argparse.Namespace) -> None:
    """Resolve the app, run one request, and exit 1 on a failure status."""
    try:
        app = resolve_app(args.app)
    except (ImportError, FileNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    configure_logging(args.log_level, app.config.log_level)
    response = app.run(build_environ(args), sys.stdout.buffer)
    if response.status.is_failure:
        raise SystemExit(1)

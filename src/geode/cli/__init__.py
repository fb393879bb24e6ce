"""Geode CLI — route listing and simulated requests.

Entry point registered as ``geode`` in ``pyproject.toml``::

    [project.scripts]
    geode = "geode.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``geode`` command."""
    parser = argparse.ArgumentParser(
        prog="geode",
        description="Geode — a small application framework for Gemini capsules.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["debug", "info", "warning", "error"],
        help="Logging level (defaults to the app's config.log_level)",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- geode routes -----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument("app", help="Import string (e.g. capsule:app)")

    # -- geode request ----------------------------------------------------
    request_parser = subparsers.add_parser(
        "request", help="Dispatch one simulated request and print the response"
    )
    request_parser.add_argument("app", help="Import string (e.g. capsule:app)")
    request_parser.add_argument("path", help="Request path (e.g. /page/1)")
    request_parser.add_argument("--query", default="", help="Raw (percent-encoded) query")
    request_parser.add_argument("--identity", default="", help="REMOTE_USER value")
    request_parser.add_argument("--fingerprint", default="", help="TLS_CLIENT_HASH value")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from geode.cli._routes import run_routes

        run_routes(args)
    elif args.command == "request":
        from geode.cli._request import run_request

        run_request(args)


def configure_logging(level: str | None, default: str) -> None:
    """Send geode logs to stderr; stdout belongs to the response."""
    logging.basicConfig(
        level=(level or default).upper(),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

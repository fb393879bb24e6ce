"""``geode routes`` — list registered routes.

Prints every route in priority order with its handler stack, listed in
the order the handlers run.
"""

import argparse
import sys

from geode.cli._resolve import resolve_app


def _handler_name(handler: object) -> str:
    name = getattr(handler, "__name__", None)
    if name is None:
        return type(handler).__name__
    return name


def run_routes(args: argparse.Namespace) -> None:
    """List registered routes for a geode app."""
    try:
        app = resolve_app(args.app)
    except (ImportError, FileNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    routes = app.routes
    if not routes:
        print("No routes registered.")
        return

    rows: list[tuple[str, str, str]] = []
    for index, route in enumerate(routes, start=1):
        stack = " -> ".join(_handler_name(h) for h in reversed(route.stack))
        rows.append((str(index), route.pattern, stack))

    max_index = max(max(len(r[0]) for r in rows), 1)
    max_pattern = max(max(len(r[1]) for r in rows), 7)  # "PATTERN" header

    fmt = f"{{:>{max_index}}}  {{:<{max_pattern}}}  {{}}"
    print(fmt.format("#", "PATTERN", "STACK"))
    sep_len = max_index + max_pattern + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for row in rows:
        print(fmt.format(*row))

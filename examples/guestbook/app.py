"""Guestbook — certificate sessions, input prompts, and templates.

Visitors with a client certificate get a session keyed by its
fingerprint; signing requires one. Entries live in a module-level list
so the example stays self-contained.

Run:
    GUESTBOOK_SESSIONS=/tmp/guestbook geode request app:app /
"""

import os

from kida import DictLoader, Environment

from geode import (
    App,
    AppConfig,
    CertificateRequired,
    Request,
    RequireInput,
    RequireSession,
    Response,
)
from geode.middleware import Next
from geode.sessions import FileSessionStore, MemorySessionStore

TEMPLATES = {
    "index.gmi": (
        "# Guestbook\n"
        "{% for entry in entries %}\n"
        "* {{ entry }}\n"
        "{% end %}\n"
        "=> /sign Sign the guestbook\n"
    ),
}

_session_dir = os.environ.get("GUESTBOOK_SESSIONS")
app = App(
    AppConfig(lang="en"),
    sessions=FileSessionStore(_session_dir) if _session_dir else MemorySessionStore(),
    kida_env=Environment(loader=DictLoader(TEMPLATES)),
)

entries: list[str] = []


@app.route("/")
def index(request: Request, response: Response, next: Next) -> Response:
    response.write(app.render("index.gmi", entries=entries))
    return response


def sign(request: Request, response: Response, next: Next) -> Response:
    if request.session is None:
        msg = "Sign with a client certificate"
        raise CertificateRequired(msg)
    entries.append(request.input)
    request.session["signed"] = request.session.get("signed", 0) + 1
    return Response.redirect("/")


app.add_handler("/sign", sign).add_to_stack(RequireInput("Your message?")).add_to_stack(
    RequireSession("Sign with a client certificate")
)


@app.route("/me")
def me(request: Request, response: Response, next: Next) -> Response:
    if request.session is None:
        response.write("You are anonymous.\n")
    else:
        response.write(f"You have signed {request.session.get('signed', 0)} time(s).\n")
    return response


if __name__ == "__main__":
    app.run()

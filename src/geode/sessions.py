"""Certificate-keyed sessions.

Gemini has no cookies. A client that presents a certificate is
identified by its fingerprint, and the fingerprint is turned into a
session id that is safe to use as a filename.

Sessions are opt-in: pass a ``SessionStore`` to ``App``. Requests
without a certificate (or apps without a store) carry ``session=None``,
which handlers treat as "anonymous", not as an error::

    from geode import App
    from geode.sessions import FileSessionStore

    app = App(sessions=FileSessionStore("/var/lib/capsule/sessions"))

    @app.route("/visits")
    def visits(request, response, next):
        if request.session is None:
            response.write("Present a certificate to be counted.\\n")
            return response
        request.session["visits"] = request.session.get("visits", 0) + 1
        response.write(f"Visit number {request.session['visits']}\\n")
        return response
"""

import base64
import json
import logging
import threading
from pathlib import Path
from typing import Any, Protocol

logger = logging.getLogger("geode.sessions")


def session_id_for(fingerprint: str) -> str:
    """Derive a deterministic session id from a certificate fingerprint.

    URL-safe base64 with the ``=`` padding stripped. The id is never
    decoded, only compared.
    """
    encoded = base64.urlsafe_b64encode(fingerprint.encode("utf-8"))
    return encoded.decode("ascii").rstrip("=")


class Session(dict[str, Any]):
    """Session data for one certificate.

    A plain dict with the session ``id`` attached and a ``modified``
    flag so the store is only written when something changed.
    """

    __slots__ = ("id", "modified")

    def __init__(self, session_id: str, data: dict[str, Any] | None = None) -> None:
        super().__init__(data or {})
        self.id = session_id
        self.modified = False

    def __setitem__(self, key: str, value: Any) -> None:
        super().__setitem__(key, value)
        self.modified = True

    def __delitem__(self, key: str) -> None:
        super().__delitem__(key)
        self.modified = True

    def clear(self) -> None:
        super().clear()
        self.modified = True

    def pop(self, key: str, *default: Any) -> Any:
        self.modified = True
        return super().pop(key, *default)

    def setdefault(self, key: str, default: Any = None) -> Any:
        if key not in self:
            self.modified = True
        return super().setdefault(key, default)

    def popitem(self) -> tuple[str, Any]:
        item = super().popitem()
        self.modified = True
        return item

    def update(self, *args: Any, **kwargs: Any) -> None:
        super().update(*args, **kwargs)
        self.modified = True

    def __ior__(self, other: Any) -> "Session":
        super().__ior__(other)
        self.modified = True
        return self


class SessionStore(Protocol):
    """Storage for session data keyed by session id."""

    def load(self, session_id: str) -> dict[str, Any]:
        """Return the stored data for *session_id*, or an empty dict."""
        ...

    def save(self, session_id: str, data: dict[str, Any]) -> None:
        """Persist *data* under *session_id*."""
        ...


class MemorySessionStore:
    """In-process store. Useful for tests and long-lived hosts."""

    __slots__ = ("_data", "_lock")

    def __init__(self) -> None:
        self._data: dict[str, dict[str, Any]] = {}
        self._lock = threading.Lock()

    def load(self, session_id: str) -> dict[str, Any]:
        with self._lock:
            return dict(self._data.get(session_id, {}))

    def save(self, session_id: str, data: dict[str, Any]) -> None:
        with self._lock:
            self._data[session_id] = dict(data)

    def __len__(self) -> int:
        return len(self._data)


class FileSessionStore:
    """One JSON file per session under *directory*.

    Suits the one-process-per-request model: state survives between
    invocations without a server process.
    """

    __slots__ = ("directory",)

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def _path(self, session_id: str) -> Path:
        return self.directory / f"{session_id}.json"

    def load(self, session_id: str) -> dict[str, Any]:
        path = self._path(session_id)
        if not path.is_file():
            return {}
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            logger.warning("Discarding unreadable session file %s", path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Discarding malformed session file %s", path)
            return {}
        return data

    def save(self, session_id: str, data: dict[str, Any]) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(session_id)
        tmp = path.with_suffix(".tmp")
        tmp.write_text(json.dumps(data), encoding="utf-8")
        tmp.replace(path)


def bind_session(fingerprint: str, store: SessionStore | None) -> Session | None:
    """Activate the session for *fingerprint*.

    Returns ``None`` when there is no certificate or no store. A store
    that fails to load is logged and also yields ``None``, so the request
    proceeds as anonymous.
    """
    if not fingerprint or store is None:
        return None
    session_id = session_id_for(fingerprint)
    try:
        data = store.load(session_id)
    except Exception:
        logger.exception("Failed to load session %s", session_id)
        return None
    return Session(session_id, data)


def save_session(session: Session | None, store: SessionStore | None) -> bool:
    """Write *session* back to *store* if it was modified.

    Returns True when a write happened.
    """
    if session is None or store is None or not session.modified:
        return False
    store.save(session.id, dict(session))
    session.modified = False
    return True

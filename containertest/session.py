"""Per-process session identity and the labels put on every managed resource."""

from __future__ import annotations

import threading
import uuid

VERSION = "0.20.0"

LABEL_BASE = "org.testcontainers"
LABEL_LANG = LABEL_BASE + ".lang"
LABEL_REAPER = LABEL_BASE + ".reaper"
LABEL_SESSION_ID = LABEL_BASE + ".sessionId"
LABEL_VERSION = LABEL_BASE + ".version"

LANGUAGE = "python"

_lock = threading.Lock()
_session: uuid.UUID | None = None


def session_id() -> uuid.UUID:
    """Return the session UUID, created once on first use."""
    global _session
    with _lock:
        if _session is None:
            _session = uuid.uuid4()
        return _session


def session_string() -> str:
    """Return the session UUID in its canonical string form."""
    return str(session_id())


def default_labels() -> dict[str, str]:
    """Return a fresh dict of the labels identifying this library and session."""
    return {
        LABEL_LANG: LANGUAGE,
        LABEL_VERSION: VERSION,
        LABEL_SESSION_ID: session_string(),
    }
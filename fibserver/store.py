from datetime import datetime, timezone
from typing import Any, Dict

from flask import current_app

from .fibonacci import FibonacciState
from .guard import Mutex, RWLock

# Szerver oldali session store (Flask cookie csak a SID-et viszi)
SessionTable = Dict[str, Dict[str, Any]]


# Folyamat szintű megosztott állapot, minden hozzáférés guard-on át
class AppState:
    def __init__(self, backend):
        self.fibonacci = Mutex(FibonacciState())
        self.users = RWLock({})
        self.sessions: Mutex[SessionTable] = Mutex({})
        self.backend = backend


def state() -> AppState:
    return current_app.extensions["fibserver"]


def now() -> datetime:
    return datetime.now(timezone.utc)

import atexit
import logging
import threading
from datetime import timedelta
from typing import List, Tuple
from .guard import LockError, Mutex
from .store import SessionTable, now, state

logger = logging.getLogger("app")

# Futó karbantartó threadek (thread, stop event) párjai
_running: List[Tuple[threading.Thread, threading.Event]] = []
_running_lock = threading.Lock()


# Lejárt munkamenetek törlése, a törölt darabszámmal tér vissza
def sweep_idle_sessions(sessions: Mutex[SessionTable], idle: timedelta) -> int:
    cutoff = now() - idle
    with sessions.lock() as table:
        expired = [sid for sid, s in table.items() if s["last_activity"] < cutoff]
        for sid in expired:
            table.pop(sid, None)
    return len(expired)


# Karbantartó loop
def _maintenance_loop(app, stop_event: threading.Event):
    with app.app_context():
        interval = app.config["SESSION_SWEEP_SECONDS"]
        idle = timedelta(minutes=app.config["SESSION_IDLE_MINUTES"])
        while not stop_event.wait(interval):
            try:
                removed = sweep_idle_sessions(state().sessions, idle)
            except LockError:
                logger.error("session_sweep_lock_error")
                continue
            if removed:
                logger.info(f"session_timeout_maintenance removed={removed}")


# Karbantartó thread indítása
def start_maintenance_thread(app) -> threading.Thread:
    stop_event = threading.Event()
    t = threading.Thread(target=_maintenance_loop, args=(app, stop_event), name="maintenance", daemon=True)
    t.start()
    app.extensions["fibserver.maintenance"] = (t, stop_event)
    with _running_lock:
        _running.append((t, stop_event))
    return t


# Leállítás és join; többször is hívható
def stop_maintenance_thread(app, timeout: float = 5.0) -> None:
    entry = app.extensions.pop("fibserver.maintenance", None)
    if entry is None:
        return
    t, stop_event = entry
    stop_event.set()
    t.join(timeout)
    with _running_lock:
        if entry in _running:
            _running.remove(entry)


# Kilépéskor az összes még futó thread leállítása (egyetlen atexit hook)
@atexit.register
def _stop_all():
    with _running_lock:
        entries = list(_running)
        _running.clear()
    for _, stop_event in entries:
        stop_event.set()
    for t, _ in entries:
        t.join(1.0)

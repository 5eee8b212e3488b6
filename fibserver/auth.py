import hashlib
import hmac
import uuid
import logging
from dataclasses import dataclass, field
from datetime import timedelta
from functools import wraps
from typing import Any, Dict, Optional

from flask import Blueprint, current_app, g, request, session as flask_session

from .guard import LockError
from .responses import plain, read_json
from .store import state, now

logger = logging.getLogger("app")
auth_bp = Blueprint("auth", __name__)

# Az egyetlen principal azonosítója
USER_ID = 1

SESSION_LOCK_MESSAGE = "unable to lock session state"


@dataclass(frozen=True)
class SimpleUser:
    id: int
    username: str
    password: str = field(repr=False)

    def session_auth_hash(self, secret_key: str) -> str:
        # a jelszóból származtatott token, nem maga a jelszó
        return hmac.new(secret_key.encode(), self.password.encode(), hashlib.sha256).hexdigest()


@dataclass(frozen=True)
class Credentials:
    username: str
    password: str = field(repr=False)

    @classmethod
    def from_json(cls, data: Any) -> "Credentials":
        if not isinstance(data, dict):
            raise ValueError("credentials must be a JSON object")
        for key in ("username", "password"):
            if not isinstance(data.get(key), str):
                raise ValueError(f"{key} must be a string")
        return cls(username=data["username"], password=data["password"])


class AuthError(Exception):
    message = "authentication error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)


class InvalidCredentials(AuthError):
    message = "Invalid username/password"


class UnknownUser(AuthError):
    message = "Unknown user"


# Csak egyetlen, konfigurált belépési adat érvényes
class SimpleBackend:
    def __init__(self, username: str, password: str):
        self._user = SimpleUser(id=USER_ID, username=username, password=password)

    def authenticate(self, creds: Credentials) -> SimpleUser:
        # mindkét összehasonlítás lefut, konstans idő
        username_ok = hmac.compare_digest(creds.username.encode(), self._user.username.encode())
        password_ok = hmac.compare_digest(creds.password.encode(), self._user.password.encode())
        if username_ok and password_ok:
            return self._user
        raise InvalidCredentials()

    def resolve(self, user_id: int) -> SimpleUser:
        if user_id == self._user.id:
            return self._user
        raise UnknownUser()


def _auth_hash(user: SimpleUser) -> str:
    return user.session_auth_hash(current_app.config["SECRET_KEY"])


# A cookie mindenképp törlődik, a szerver oldali törlés LockError-t dobhat
def _drop_session(sid: str) -> None:
    flask_session.pop("sid", None)
    with state().sessions.lock() as sessions:
        sessions.pop(sid, None)


def _session_lock_error():
    logger.error(f"session_lock_error path={request.path}")
    return plain(SESSION_LOCK_MESSAGE, 500)


# Aktuális munkamenet lekérése (másolat, a lock-on kívül is olvasható)
def current_session() -> Optional[Dict[str, Any]]:
    sid = flask_session.get("sid")
    if not sid:
        return None
    with state().sessions.lock() as sessions:
        s = sessions.get(sid)
        return dict(s) if s else None


# Bejelentkezés nélkül 401, a route-ok védelmére
def login_required(view):
    @wraps(view)
    def wrapped(*args, **kwargs):
        sid = flask_session.get("sid")
        if not sid:
            return plain("unauthorized", 401)
        try:
            s = current_session()
        except LockError:
            return _session_lock_error()
        if not s:
            flask_session.pop("sid", None)
            return plain("unauthorized", 401)

        try:
            user = state().backend.resolve(s["user_id"])
        except UnknownUser:
            logger.warning(f"session_unknown_user user_id={s['user_id']}")
            try:
                _drop_session(sid)
            except LockError:
                return _session_lock_error()
            return plain("unauthorized", 401)

        # jelszócsere után a régi session érvénytelen
        if not hmac.compare_digest(s["auth_hash"], _auth_hash(user)):
            logger.warning(f"session_hash_mismatch user={user.username}")
            try:
                _drop_session(sid)
            except LockError:
                return _session_lock_error()
            return plain("unauthorized", 401)

        g.user = user
        return view(*args, **kwargs)

    return wrapped


# Idle-timeout check minden kérés előtt
@auth_bp.before_app_request
def enforce_idle_timeout():
    sid = flask_session.get("sid")
    if not sid:
        return None
    idle = timedelta(minutes=current_app.config["SESSION_IDLE_MINUTES"])
    try:
        with state().sessions.lock() as sessions:
            s = sessions.get(sid)
            if s is None:
                return None
            if now() - s["last_activity"] > idle:
                # timeout -> session clear
                sessions.pop(sid, None)
                expired_user = s["user_id"]
            else:
                s["last_activity"] = now()
                return None
    except LockError:
        # a védett route 500-zal jelzi
        logger.error(f"session_lock_error path={request.path}")
        return None
    flask_session.pop("sid", None)
    logger.info(f"session_timeout user_id={expired_user}")
    return None


# Login kérés kezelése
@auth_bp.post("/login")
def do_login():
    data, error = read_json()
    if error is not None:
        return error
    try:
        creds = Credentials.from_json(data)
    except ValueError as e:
        return plain(str(e), 422)

    try:
        user = state().backend.authenticate(creds)
    except InvalidCredentials:
        logger.info(f"login_failed user={creds.username}")
        return plain("invalid credentials", 403)

    # Munkamenet létrehozása, régi SID eldobása
    old_sid = flask_session.get("sid")
    sid = str(uuid.uuid4())
    try:
        with state().sessions.lock() as sessions:
            if old_sid:
                sessions.pop(old_sid, None)
            sessions[sid] = {
                "user_id": user.id,
                "auth_hash": _auth_hash(user),
                "last_activity": now(),
            }
    except LockError:
        logger.error(f"login_bind_failed user={user.username}")
        return plain("login failed", 500)
    flask_session["sid"] = sid
    flask_session.permanent = False

    logger.info(f"login_ok user={user.username} user_id={user.id}")
    return plain()


# Kijelentkezés kérés kezelése
@auth_bp.route("/logout", methods=["GET", "POST"])
def do_logout():
    sid = flask_session.get("sid")
    if sid:
        try:
            _drop_session(sid)
        except LockError:
            return _session_lock_error()
        logger.info("logout_ok")
    return plain()

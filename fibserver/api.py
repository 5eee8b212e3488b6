import logging
from flask import Blueprint
from .auth import login_required
from .fibonacci import AdditionOverflow, FibonacciError, next_fibonacci
from .responses import json_text, plain, read_json
from .store import state
from .users import User, UnknownUser, UserError, get_user, get_users, update_user

logger = logging.getLogger("app")
api_bp = Blueprint("api", __name__)


# Következő Fibonacci szám
@api_bp.post("/next")
@login_required
def api_next():
    try:
        result = next_fibonacci(state().fibonacci)
    except AdditionOverflow as e:
        logger.warning(f"fibonacci_overflow err={e}")
        return plain(str(e), 500)
    except FibonacciError as e:
        logger.error(f"fibonacci_error err={e}")
        return plain(str(e), 500)
    return plain(str(result))


# Összes user
@api_bp.get("/users")
@login_required
def api_users():
    try:
        body = get_users(state().users)
    except UserError as e:
        logger.error(f"users_error err={e}")
        return plain(str(e), 500)
    return json_text(body)


# User létrehozása / felülírása
@api_bp.post("/users")
@login_required
def api_update_user():
    data, error = read_json()
    if error is not None:
        return error
    try:
        user = User.from_json(data)
    except ValueError as e:
        return plain(str(e), 422)

    try:
        update_user(state().users, user)
    except UserError as e:
        logger.error(f"user_update_error user_id={user.id} err={e}")
        return plain(str(e), 500)
    logger.info(f"user_upsert user_id={user.id}")
    return plain()


# Egy user azonosító alapján
@api_bp.get("/user/<user_id>")
@login_required
def api_user(user_id: str):
    try:
        body = get_user(state().users, user_id)
    except UnknownUser as e:
        return plain(str(e), 404)
    except UserError as e:
        logger.error(f"user_error user_id={user_id} err={e}")
        return plain(str(e), 500)
    return json_text(body)


@api_bp.get("/healthz")
def healthz():
    return plain("ok")

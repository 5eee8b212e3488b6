import json
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from .guard import LockError, RWLock


@dataclass(frozen=True)
class User:
    id: str
    name: str
    age: int

    @classmethod
    def from_json(cls, data: Any) -> "User":
        # csak az alak ellenőrzése, ismeretlen mezők figyelmen kívül
        if not isinstance(data, dict):
            raise ValueError("user must be a JSON object")
        for field in ("id", "name"):
            if not isinstance(data.get(field), str):
                raise ValueError(f"{field} must be a string")
        age = data.get("age")
        if isinstance(age, bool) or not isinstance(age, int) or not 0 <= age <= 255:
            raise ValueError("age must be an integer between 0 and 255")
        return cls(id=data["id"], name=data["name"], age=age)


UserState = RWLock[Dict[str, User]]


class UserError(Exception):
    message = "user error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)


class UserLockError(UserError):
    message = "unable to lock user state"


class SerializationError(UserError):
    message = "failed to serialize user list"


class UnknownUser(UserError):
    message = "user does not exist for the given ID"


def _to_json(value: Any) -> str:
    try:
        return json.dumps(value, indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise SerializationError() from e


# Összes user JSON listaként
def get_users(users: UserState) -> str:
    try:
        with users.read() as table:
            return _to_json([asdict(u) for u in table.values()])
    except LockError as e:
        raise UserLockError() from e


# Egy user JSON objektumként
def get_user(users: UserState, user_id: str) -> str:
    try:
        with users.read() as table:
            user = table.get(user_id)
            if user is None:
                raise UnknownUser()
            return _to_json(asdict(user))
    except LockError as e:
        raise UserLockError() from e


# Létrehozás vagy teljes felülírás
def update_user(users: UserState, user: User) -> None:
    try:
        with users.write() as table:
            table[user.id] = user
    except LockError as e:
        raise UserLockError() from e

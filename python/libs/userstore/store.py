"""Thread-safe in-memory user store."""

from __future__ import annotations

import threading

from userstore.models import User


class UserStore:
    """Holds user records keyed by id behind a single lock.

    Every method takes the lock for its whole duration. A ``get_user``
    followed by ``update_user`` is not atomic as a pair; callers that need
    an existence check do it themselves.
    """

    def __init__(self) -> None:
        self._users: dict[str, User] = {}
        self._lock = threading.Lock()

    def add_user(self, user: User) -> None:
        with self._lock:
            self._users[user.id] = user

    def get_user(self, user_id: str) -> User | None:
        with self._lock:
            return self._users.get(user_id)

    def update_user(self, user: User) -> None:
        # Upsert, same as add_user.
        with self._lock:
            self._users[user.id] = user

    def delete_user(self, user_id: str) -> None:
        with self._lock:
            self._users.pop(user_id, None)

    def list_users(self) -> list[User]:
        with self._lock:
            return list(self._users.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)

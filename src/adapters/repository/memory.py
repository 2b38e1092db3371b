"""
In-memory repository adapter - Implements RegistryPersistence protocol.

Keeps users, confirmation codes and confirmation flags in dictionaries.
Used as the default development backend and as a fake in tests.
"""

import threading

from src.domain.exceptions import PersistenceError
from src.domain.user import User


class InMemoryRegistryPersistence:
    """
    Implements RegistryPersistence protocol with process-local state.

    Uses structural subtyping - no explicit inheritance from Protocol.
    A single lock serializes writes so that save_user() rejects a
    duplicate name even when two registrations race.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._users: dict[str, User] = {}
        self._codes: dict[str, str] = {}
        self._confirmed: set[str] = set()

    def save_user(self, user: User) -> None:
        with self._lock:
            if user.name in self._users:
                raise PersistenceError(f"user {user.name!r} is already stored")
            self._users[user.name] = user

    def user_was_saved(self, name: str) -> bool:
        return name in self._users

    def save_confirmation_code(self, name: str, code: str) -> None:
        with self._lock:
            self._require_user(name)
            self._codes[name] = code

    def get_confirmation_code(self, name: str) -> str:
        try:
            return self._codes[name]
        except KeyError:
            raise PersistenceError(f"no confirmation code stored for {name!r}") from None

    def mark_email_as_confirmed(self, name: str) -> None:
        with self._lock:
            self._require_user(name)
            self._confirmed.add(name)

    def is_email_confirmed(self, name: str) -> bool:
        return name in self._confirmed

    def get_user_email(self, name: str) -> str:
        try:
            return self._users[name].email
        except KeyError:
            raise PersistenceError(f"user {name!r} is not stored") from None

    def _require_user(self, name: str) -> None:
        # Same rule as the foreign keys of the PostgreSQL schema
        if name not in self._users:
            raise PersistenceError(f"user {name!r} is not stored")

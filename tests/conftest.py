"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- Spy persistence and message client doubles (fresh per test)
- A user registry wired to those doubles
- Sample users
"""

import pytest

from src.adapters.repository.memory import InMemoryRegistryPersistence
from src.domain.exceptions import MessageDeliveryError, PersistenceError
from src.domain.ports import Message
from src.domain.registry import UserRegistry
from src.domain.user import User

TEST_BASE_URL = "https://regal.test"


class SpyPersistence(InMemoryRegistryPersistence):
    """
    In-memory persistence that records calls and can be told to fail.

    Add a method name to fail_on to make that method raise PersistenceError.
    """

    def __init__(self) -> None:
        super().__init__()
        self.calls: list[tuple[str, tuple]] = []
        self.fail_on: set[str] = set()

    def _record(self, method: str, *args: object) -> None:
        self.calls.append((method, args))
        if method in self.fail_on:
            raise PersistenceError(f"{method} failed")

    def calls_to(self, method: str) -> list[tuple]:
        return [args for name, args in self.calls if name == method]

    def stored_code(self, name: str) -> str | None:
        """Latest stored code, read without recording a call."""
        try:
            return InMemoryRegistryPersistence.get_confirmation_code(self, name)
        except PersistenceError:
            return None

    def save_user(self, user: User) -> None:
        self._record("save_user", user)
        super().save_user(user)

    def user_was_saved(self, name: str) -> bool:
        self._record("user_was_saved", name)
        return super().user_was_saved(name)

    def save_confirmation_code(self, name: str, code: str) -> None:
        self._record("save_confirmation_code", name, code)
        super().save_confirmation_code(name, code)

    def get_confirmation_code(self, name: str) -> str:
        self._record("get_confirmation_code", name)
        return super().get_confirmation_code(name)

    def mark_email_as_confirmed(self, name: str) -> None:
        self._record("mark_email_as_confirmed", name)
        super().mark_email_as_confirmed(name)

    def is_email_confirmed(self, name: str) -> bool:
        self._record("is_email_confirmed", name)
        return super().is_email_confirmed(name)

    def get_user_email(self, name: str) -> str:
        self._record("get_user_email", name)
        return super().get_user_email(name)


class SpyMessageClient:
    """Message client that keeps every sent message. Set fail to make send() raise."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, Message]] = []
        self.fail = False

    def send(self, address: str, message: Message) -> None:
        if self.fail:
            raise MessageDeliveryError(f"could not deliver message to {address}")
        self.sent.append((address, message))


@pytest.fixture
def persistence() -> SpyPersistence:
    return SpyPersistence()


@pytest.fixture
def message_client() -> SpyMessageClient:
    return SpyMessageClient()


@pytest.fixture
def registry(persistence: SpyPersistence, message_client: SpyMessageClient) -> UserRegistry:
    return UserRegistry(
        persistence=persistence,
        message_client=message_client,
        confirmation_base_url=TEST_BASE_URL,
    )


@pytest.fixture
def alice() -> User:
    return User.create("alice", "alice@x.com")

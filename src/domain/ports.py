"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from dataclasses import dataclass
from typing import Protocol

from .user import User


@dataclass(frozen=True)
class Message:
    """A message handed to a MessageClient. Built per send, never stored."""

    subject: str
    body: str


class RegistryPersistence(Protocol):
    """
    Port interface for registry persistence.

    Implementations signal storage failures by raising; the registry
    wraps whatever they raise with operation-specific context.
    Uniqueness of user names must be enforced here, the registry does
    not lock between its existence check and save_user().
    """

    def save_user(self, user: User) -> None:
        """
        Store a new user.

        Raises:
            PersistenceError: If the user cannot be stored, including when
                a user with the same name is already stored
        """
        ...

    def user_was_saved(self, name: str) -> bool:
        """Return True if a user with this name has been stored."""
        ...

    def save_confirmation_code(self, name: str, code: str) -> None:
        """
        Store the confirmation code for a user.

        Overwrites any previous code for the same name (latest write wins).

        Raises:
            PersistenceError: If the code cannot be stored, including when
                no user with that name is stored
        """
        ...

    def get_confirmation_code(self, name: str) -> str:
        """
        Return the latest confirmation code stored for a user.

        Raises:
            PersistenceError: If no code is stored for the name
        """
        ...

    def mark_email_as_confirmed(self, name: str) -> None:
        """
        Record that the user's email is confirmed. Idempotent.

        Raises:
            PersistenceError: If the flag cannot be stored, including when
                no user with that name is stored
        """
        ...

    def is_email_confirmed(self, name: str) -> bool:
        """
        Return the confirmation state of a user's email.

        An unknown name is reported as False, not as an error.
        """
        ...

    def get_user_email(self, name: str) -> str:
        """
        Return the stored email of a user.

        Raises:
            PersistenceError: If no user with this name is stored
        """
        ...


class MessageClient(Protocol):
    """Port interface for message delivery."""

    def send(self, address: str, message: Message) -> None:
        """
        Deliver a message to an address.

        Args:
            address: Recipient email address
            message: Subject and body to deliver

        Raises:
            MessageDeliveryError: If the message cannot be delivered
        """
        ...

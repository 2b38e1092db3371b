"""
Domain layer - Pure business logic with zero framework imports.

This package contains the core business logic for the user registry:
registration, confirmation code issuance and email confirmation. It
defines its own port interfaces for infrastructure abstraction, ensuring
true hexagonal architecture decoupling.
"""

from .exceptions import (
    ConfirmationCodeNotSaved,
    ConfirmationMessageNotSent,
    ConfirmationResendError,
    CouldNotCheckUser,
    CouldNotSaveUser,
    EmailAlreadyConfirmed,
    EmailConfirmationError,
    EmailNotConfirmed,
    ErrorKind,
    InvalidConfirmationCode,
    InvalidUser,
    MessageDeliveryError,
    PersistenceError,
    RegistryError,
    UserAlreadyExists,
    UserCreationError,
    UserEmailUnavailable,
    UserNotFound,
)
from .ports import Message, MessageClient, RegistryPersistence
from .registry import UserRegistry
from .user import User

__all__ = [
    "ConfirmationCodeNotSaved",
    "ConfirmationMessageNotSent",
    "ConfirmationResendError",
    "CouldNotCheckUser",
    "CouldNotSaveUser",
    "EmailAlreadyConfirmed",
    "EmailConfirmationError",
    "EmailNotConfirmed",
    "ErrorKind",
    "InvalidConfirmationCode",
    "InvalidUser",
    "Message",
    "MessageClient",
    "MessageDeliveryError",
    "PersistenceError",
    "RegistryError",
    "RegistryPersistence",
    "User",
    "UserAlreadyExists",
    "UserCreationError",
    "UserEmailUnavailable",
    "UserNotFound",
    "UserRegistry",
]

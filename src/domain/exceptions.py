"""
Domain exceptions - Semantic error types for the user registry.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.

Every RegistryError carries an ErrorKind so callers can branch on the
category of failure, while the collaborator error that triggered it
(if any) is preserved as ``__cause__``.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Category of a registry failure."""

    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    PRECONDITION = "precondition"
    PERSISTENCE = "persistence"
    DELIVERY = "delivery"


class RegistryError(Exception):
    """Base class for user registry domain errors."""

    kind = ErrorKind.PERSISTENCE


class InvalidUser(RegistryError):
    """User name or email rejected at construction time."""

    kind = ErrorKind.VALIDATION


class CouldNotCheckUser(RegistryError):
    """Persistence failed while checking whether a user exists."""

    pass


class UserNotFound(RegistryError):
    """Operation requires a registered user and none exists."""

    kind = ErrorKind.NOT_FOUND


class UserCreationError(RegistryError):
    """Creating a user failed at some step."""

    pass


class UserAlreadyExists(UserCreationError):
    """A user with the same name is already registered."""

    kind = ErrorKind.CONFLICT


class CouldNotSaveUser(UserCreationError):
    """Persistence rejected or failed to store the user."""

    pass


class ConfirmationCodeNotSaved(UserCreationError):
    """User was stored but its confirmation code was not."""

    pass


class ConfirmationMessageNotSent(UserCreationError):
    """Confirmation message could not be delivered."""

    kind = ErrorKind.DELIVERY


class EmailConfirmationError(RegistryError):
    """Confirming an email address failed."""

    pass


class InvalidConfirmationCode(EmailConfirmationError):
    """Provided code does not match the stored one."""

    kind = ErrorKind.VALIDATION


class EmailAlreadyConfirmed(EmailConfirmationError):
    """Email is already confirmed, no new code is issued."""

    kind = ErrorKind.PRECONDITION


class ConfirmationResendError(RegistryError):
    """Re-issuing a confirmation code failed."""

    pass


class UserEmailUnavailable(RegistryError):
    """User email could not be returned."""

    pass


class EmailNotConfirmed(UserEmailUnavailable):
    """Email has not been confirmed yet."""

    kind = ErrorKind.PRECONDITION


class PersistenceError(Exception):
    """Raised by persistence adapters when a storage operation fails."""

    pass


class MessageDeliveryError(Exception):
    """Raised by message clients when a message cannot be delivered."""

    pass

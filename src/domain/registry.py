"""
User registry domain service - registration and email confirmation.

This module contains the core business logic for admitting users and
proving they control their email address.

Confirmation State Machine (per user, forward-only)
===================================================

States:
- NOT_REGISTERED: No user stored under the name
- UNCONFIRMED: User stored, confirmation code issued and sent
- CONFIRMED: Confirmation code presented and matched

Valid Transitions:
    NOT_REGISTERED -> UNCONFIRMED  (create_user)
    UNCONFIRMED    -> UNCONFIRMED  (resend_confirmation_code, replaces the code)
    UNCONFIRMED    -> CONFIRMED    (confirm_user_email with the latest code)

Invalid Transitions (never allowed):
    CONFIRMED -> any               (CONFIRMED is terminal)
    create_user on a stored name   (rejected, no state change)

The registry takes no locks. Steps of a multi-step operation are not
atomic, and uniqueness of names under concurrent creation is the
persistence adapter's responsibility.
"""

import logging
import secrets
import string
from dataclasses import dataclass
from urllib.parse import quote

from .exceptions import (
    ConfirmationCodeNotSaved,
    ConfirmationMessageNotSent,
    ConfirmationResendError,
    CouldNotCheckUser,
    CouldNotSaveUser,
    EmailAlreadyConfirmed,
    EmailConfirmationError,
    EmailNotConfirmed,
    InvalidConfirmationCode,
    UserAlreadyExists,
    UserCreationError,
    UserEmailUnavailable,
    UserNotFound,
)
from .ports import Message, MessageClient, RegistryPersistence
from .user import User

logger = logging.getLogger(__name__)

DEFAULT_CONFIRMATION_BASE_URL = "http://localhost:8080"
DEFAULT_CODE_LENGTH = 10
MIN_CODE_LENGTH = 8

_CODE_ALPHABET = string.ascii_letters + string.digits


@dataclass
class UserRegistry:
    """
    Domain service for user registration.

    Orchestrates user creation, confirmation code issuance and
    verification, and access to confirmed email addresses.

    propagate_delivery_errors selects what happens when the message
    client fails: raise ConfirmationMessageNotSent (True), or log a
    warning and treat the message as best-effort (False).
    """

    persistence: RegistryPersistence
    message_client: MessageClient
    confirmation_base_url: str = DEFAULT_CONFIRMATION_BASE_URL
    code_length: int = DEFAULT_CODE_LENGTH
    propagate_delivery_errors: bool = True

    def __post_init__(self) -> None:
        if self.code_length < MIN_CODE_LENGTH:
            raise ValueError(
                f"code_length must be at least {MIN_CODE_LENGTH}, got {self.code_length}"
            )

    def create_user(self, user: User) -> None:
        """
        Register a user and send them a confirmation link.

        Args:
            user: Validated user entity

        Raises:
            UserAlreadyExists: If the name is already registered
            CouldNotSaveUser: If persistence fails to store the user
            ConfirmationCodeNotSaved: If the user was stored but the code was not
            ConfirmationMessageNotSent: If delivery fails and errors propagate
            UserCreationError: If the existence check itself fails
        """
        try:
            exists = self.user_exists(user.name)
        except CouldNotCheckUser as exc:
            raise UserCreationError(f"could not create user {user.name!r}") from exc
        if exists:
            raise UserAlreadyExists(f"user {user.name!r} already exists")

        try:
            self.persistence.save_user(user)
        except Exception as exc:
            raise CouldNotSaveUser(f"could not save user {user.name!r}") from exc

        code = self._generate_confirmation_code()
        try:
            self.persistence.save_confirmation_code(user.name, code)
        except Exception as exc:
            raise ConfirmationCodeNotSaved(
                f"could not save confirmation code for user {user.name!r}"
            ) from exc

        logger.info("User %s created, sending confirmation code", user.name)
        self._send_confirmation(user.name, user.email, code)

    def user_exists(self, name: str) -> bool:
        """
        Check whether a user is registered. Always asks persistence.

        Raises:
            CouldNotCheckUser: If persistence fails
        """
        try:
            return self.persistence.user_was_saved(name)
        except Exception as exc:
            raise CouldNotCheckUser(f"could not check user {name!r}") from exc

    def confirm_user_email(self, name: str, provided_code: str) -> None:
        """
        Mark a user's email as confirmed if the provided code matches.

        The comparison is exact and case-sensitive. A mismatch leaves the
        confirmation state untouched.

        Raises:
            UserNotFound: If the user is not registered
            InvalidConfirmationCode: If the code does not match the stored one
            EmailConfirmationError: If persistence fails
            CouldNotCheckUser: If the existence check fails
        """
        self._require_user(name)

        try:
            saved_code = self.persistence.get_confirmation_code(name)
        except Exception as exc:
            raise EmailConfirmationError(
                f"could not get confirmation code for user {name!r}"
            ) from exc

        if not secrets.compare_digest(saved_code.encode(), provided_code.encode()):
            raise InvalidConfirmationCode(f"invalid confirmation code for user {name!r}")

        try:
            self.persistence.mark_email_as_confirmed(name)
        except Exception as exc:
            raise EmailConfirmationError(
                f"could not mark email of user {name!r} as confirmed"
            ) from exc
        logger.info("Email of user %s confirmed", name)

    def user_email_is_confirmed(self, name: str) -> bool:
        """
        Return whether the user's email has been confirmed.

        Raises:
            UserNotFound: If the user is not registered
            EmailConfirmationError: If persistence fails
        """
        self._require_user(name)
        try:
            return self.persistence.is_email_confirmed(name)
        except Exception as exc:
            raise EmailConfirmationError(
                f"could not check email confirmation of user {name!r}"
            ) from exc

    def get_user_email(self, name: str) -> str:
        """
        Return the email of a user whose address has been confirmed.

        Raises:
            UserNotFound: If the user is not registered
            EmailNotConfirmed: If the email has not been confirmed yet
            UserEmailUnavailable: If persistence fails
        """
        self._require_user(name)

        try:
            confirmed = self.persistence.is_email_confirmed(name)
        except Exception as exc:
            raise UserEmailUnavailable(f"could not get email of user {name!r}") from exc
        if not confirmed:
            raise EmailNotConfirmed(f"email of user {name!r} is not confirmed")

        try:
            return self.persistence.get_user_email(name)
        except Exception as exc:
            raise UserEmailUnavailable(f"could not get email of user {name!r}") from exc

    def resend_confirmation_code(self, name: str) -> None:
        """
        Issue a fresh confirmation code and send it again.

        The new code replaces the previous one, so earlier links stop
        working. Also recovers a user whose code was never saved.

        Raises:
            UserNotFound: If the user is not registered
            EmailAlreadyConfirmed: If there is nothing left to confirm
            ConfirmationResendError: If persistence fails
            ConfirmationMessageNotSent: If delivery fails and errors propagate
        """
        self._require_user(name)

        try:
            confirmed = self.persistence.is_email_confirmed(name)
            email = None if confirmed else self.persistence.get_user_email(name)
        except Exception as exc:
            raise ConfirmationResendError(
                f"could not load user {name!r} to resend confirmation code"
            ) from exc
        if confirmed:
            raise EmailAlreadyConfirmed(f"email of user {name!r} is already confirmed")

        code = self._generate_confirmation_code()
        try:
            self.persistence.save_confirmation_code(name, code)
        except Exception as exc:
            raise ConfirmationResendError(
                f"could not save confirmation code for user {name!r}"
            ) from exc

        logger.info("Confirmation code re-issued for user %s", name)
        self._send_confirmation(name, email, code)

    def _require_user(self, name: str) -> None:
        if not self.user_exists(name):
            raise UserNotFound(f"user {name!r} does not exist")

    def _send_confirmation(self, name: str, email: str, code: str) -> None:
        message = self._build_confirmation_message(name, code)
        try:
            self.message_client.send(email, message)
        except Exception as exc:
            if self.propagate_delivery_errors:
                raise ConfirmationMessageNotSent(
                    f"could not send confirmation message to user {name!r}"
                ) from exc
            logger.warning(
                "Confirmation message for user %s was not delivered", name, exc_info=True
            )

    def _build_confirmation_message(self, name: str, code: str) -> Message:
        link = self._make_confirmation_link(name, code)
        return Message(
            subject=f"Hi {name}, welcome to regal, please confirm your email",
            body=(
                f"Hi {name}, welcome to regal, please confirm your email by clicking "
                f"on the following link: {link}"
            ),
        )

    def _make_confirmation_link(self, name: str, code: str) -> str:
        """Build <base>/confirm/<name>/<code>, quoting the name for the path."""
        base = self.confirmation_base_url.rstrip("/")
        return f"{base}/confirm/{quote(name, safe='')}/{code}"

    def _generate_confirmation_code(self) -> str:
        """
        Generate a cryptographically secure alphanumeric confirmation code.

        Uses the secrets module; 62 symbols per position.
        """
        return "".join(secrets.choice(_CODE_ALPHABET) for _ in range(self.code_length))

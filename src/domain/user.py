"""
User entity - Immutable value identifying a registered user.

The registry never mutates a User; confirmation state is stored
separately by the persistence port, keyed by name.
"""

import re
from dataclasses import dataclass

from .exceptions import InvalidUser

# Names travel as a single URL path segment in confirmation links
_NAME_PATTERN = re.compile(r"[A-Za-z0-9_.-]+")


@dataclass(frozen=True)
class User:
    """A user identified by a unique name, reachable at an email address."""

    name: str
    email: str

    @classmethod
    def create(cls, name: str, email: str) -> "User":
        """
        Build a validated User.

        Surrounding whitespace is stripped from both values. The name ends up
        inside confirmation links, so it is limited to ASCII letters, digits,
        '_', '.' and '-', and may not consist of dots only ('.' and '..' are
        collapsed by HTTP clients).

        Raises:
            InvalidUser: If the name or email is malformed
        """
        name = name.strip()
        email = email.strip()

        if not name:
            raise InvalidUser("user name must not be empty")
        if not _NAME_PATTERN.fullmatch(name):
            raise InvalidUser(f"user name contains forbidden characters: {name!r}")
        if not name.strip("."):
            raise InvalidUser(f"user name must not consist of dots only: {name!r}")

        local, sep, domain = email.partition("@")
        if not sep or not local or not domain or "@" in domain:
            raise InvalidUser(f"invalid email address: {email!r}")

        return cls(name=name, email=email)

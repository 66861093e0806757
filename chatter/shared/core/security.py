"""
Security utilities for password hashing and password policy checks.
Session tokens live in the user management module's AuthService.
"""

import logging
from typing import List, Tuple

from passlib.context import CryptContext

logger = logging.getLogger(__name__)

PASSWORD_SPECIAL_CHARACTERS = "!@#$%^&*()_+-=[]{}|;:,.<>?"


class PasswordHasher:
    """
    Hashes and verifies passwords with bcrypt.

    The plaintext never leaves this class and is never logged.
    """

    def __init__(self, rounds: int = 10):
        self.rounds = rounds
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, plaintext: str) -> str:
        """
        Hash password using bcrypt.

        Args:
            plaintext: Plain text password

        Returns:
            str: Hashed password
        """
        digest = self._context.hash(plaintext)
        logger.debug("Password hashed successfully")
        return digest

    def verify(self, plaintext: str, digest: str) -> bool:
        """
        Verify password against hash.

        A digest that passlib cannot identify counts as a mismatch.

        Args:
            plaintext: Plain text password
            digest: Stored hashed password

        Returns:
            bool: True if password matches
        """
        try:
            is_valid = self._context.verify(plaintext, digest)
        except ValueError:
            logger.warning("Stored password digest is not a recognised bcrypt hash")
            return False

        if is_valid:
            logger.debug("Password verification successful")
        else:
            logger.debug("Password verification failed")
        return is_valid


def validate_password_strength(password: str) -> Tuple[bool, List[str]]:
    """
    Validate password strength requirements.

    Args:
        password: Password to validate

    Returns:
        tuple: (is_valid, error_messages)
    """
    errors = []

    if len(password) < 8:
        errors.append("Password must be at least 8 characters long")

    if not any(c.isupper() for c in password):
        errors.append("Password must contain at least one uppercase letter")

    if not any(c.islower() for c in password):
        errors.append("Password must contain at least one lowercase letter")

    if not any(c.isdigit() for c in password):
        errors.append("Password must contain at least one number")

    if not any(c in PASSWORD_SPECIAL_CHARACTERS for c in password):
        errors.append("Password must contain at least one special character")

    return len(errors) == 0, errors

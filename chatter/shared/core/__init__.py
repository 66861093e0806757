"""
Core building blocks shared by every Chatter module: the exception
hierarchy and password security helpers.
"""

from .exceptions import (
    AuthenticationError,
    ChatterException,
    CorruptDocumentError,
    DuplicateResourceError,
    InvalidIdentifierError,
    InvalidSignatureError,
    MigrationError,
    NotFoundError,
    StoreUnavailableError,
    TokenExpiredError,
    ValidationError,
)
from .security import PasswordHasher, validate_password_strength

__all__ = [
    "AuthenticationError",
    "ChatterException",
    "CorruptDocumentError",
    "DuplicateResourceError",
    "InvalidIdentifierError",
    "InvalidSignatureError",
    "MigrationError",
    "NotFoundError",
    "StoreUnavailableError",
    "TokenExpiredError",
    "ValidationError",
    "PasswordHasher",
    "validate_password_strength",
]

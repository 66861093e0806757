# 📄 File: chatter/shared/core/exceptions.py
# 🧭 Purpose (Layman Explanation):
# This file defines the special error types Chatter uses to say clearly what went wrong,
# like "that user does not exist" or "your session has expired", instead of generic errors.
# 🧪 Purpose (Technical Summary):
# Custom exception hierarchy providing specific error types with HTTP status codes,
# error details, and serialization for REST and GraphQL error responses.
# 🔗 Dependencies:
# FastAPI status constants, typing
# 🔄 Connected Modules / Calls From:
# Repository layer, domain services, API exception handlers, GraphQL resolvers

from typing import Any, Dict, Optional

from fastapi import status


class ChatterException(Exception):
    """
    Base exception class for the Chatter service.
    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.error_code = error_code or self.__class__.__name__.upper()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format."""
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
                "status_code": self.status_code
            }
        }


# =============================================================================
# DATA ACCESS EXCEPTIONS
# =============================================================================

class NotFoundError(ChatterException):
    """
    Exception raised when a filter matched no document.
    Never retried automatically.
    """

    def __init__(
        self,
        message: str = "Document not found",
        resource_type: Optional[str] = None,
        filter_query: Optional[Dict[str, Any]] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if resource_type:
            details["resource_type"] = resource_type
        if filter_query is not None:
            details["filter"] = {key: str(value) for key, value in filter_query.items()}

        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details=details,
            error_code="NOT_FOUND"
        )


class StoreUnavailableError(ChatterException):
    """
    Exception raised when the document store cannot be reached.
    The driver error is kept as ``__cause__``.
    """

    def __init__(
        self,
        message: str = "Document store unavailable",
        operation: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}
        if operation:
            details["operation"] = operation

        super().__init__(
            message=message,
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            details=details,
            error_code="STORE_UNAVAILABLE"
        )


class DuplicateResourceError(ChatterException):
    """
    Exception raised when a write violates a unique index.
    """

    def __init__(
        self,
        message: str = "Resource already exists",
        resource_type: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}
        if resource_type:
            details["resource_type"] = resource_type

        super().__init__(
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            details=details,
            error_code="DUPLICATE_RESOURCE"
        )


class CorruptDocumentError(ChatterException):
    """
    Exception raised when a stored document no longer matches its entity.
    """

    def __init__(
        self,
        message: str = "Stored document is not a valid entity",
        resource_type: Optional[str] = None,
        errors: Optional[list] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}
        if resource_type:
            details["resource_type"] = resource_type
        if errors:
            details["errors"] = errors

        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
            error_code="CORRUPT_DOCUMENT"
        )


# =============================================================================
# VALIDATION EXCEPTIONS
# =============================================================================

class ValidationError(ChatterException):
    """
    Exception raised for data validation failures.
    Used when input data doesn't meet validation requirements.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        value: Optional[Any] = None,
        constraint: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = status.HTTP_422_UNPROCESSABLE_ENTITY,
        error_code: str = "VALIDATION_ERROR"
    ):
        if not details:
            details = {}

        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)
        if constraint:
            details["constraint"] = constraint

        super().__init__(
            message=message,
            status_code=status_code,
            details=details,
            error_code=error_code
        )


class InvalidIdentifierError(ValidationError):
    """
    Exception raised when an identifier is not a 24-character hex ObjectId.
    """

    def __init__(self, value: Any, field: str = "_id"):
        super().__init__(
            message=f"Invalid identifier: {value!r}",
            field=field,
            value=value,
            constraint="24-character hexadecimal ObjectId",
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code="INVALID_IDENTIFIER"
        )


# =============================================================================
# AUTHENTICATION EXCEPTIONS
# =============================================================================

class AuthenticationError(ChatterException):
    """
    Exception raised for authentication failures.
    Used when user credentials or session cookies are invalid or missing.
    """

    def __init__(
        self,
        message: str = "Authentication failed",
        details: Optional[Dict[str, Any]] = None,
        error_code: str = "AUTHENTICATION_ERROR"
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED,
            details=details,
            error_code=error_code
        )


class InvalidSignatureError(AuthenticationError):
    """Session token was tampered with, malformed, or signed with another key."""

    def __init__(self, message: str = "Session token is invalid"):
        super().__init__(message=message, error_code="INVALID_TOKEN")


class TokenExpiredError(AuthenticationError):
    """Session token is past its embedded expiry."""

    def __init__(self, message: str = "Session token has expired"):
        super().__init__(message=message, error_code="TOKEN_EXPIRED")


# =============================================================================
# INFRASTRUCTURE EXCEPTIONS
# =============================================================================

class MigrationError(ChatterException):
    """
    Exception raised when a migration script fails to apply or revert.
    """

    def __init__(
        self,
        message: str = "Migration failed",
        migration: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}
        if migration:
            details["migration"] = migration

        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
            error_code="MIGRATION_ERROR"
        )

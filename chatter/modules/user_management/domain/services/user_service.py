# 📄 File: chatter/modules/user_management/domain/services/user_service.py
# 🧭 Purpose (Layman Explanation):
# The rules for user accounts: checking that emails and passwords are acceptable, scrambling
# passwords before they are saved, and creating, finding, changing and removing accounts.
# 🧪 Purpose (Technical Summary):
# Domain service for user CRUD on top of the generic repository. Validates input with pydantic,
# enforces password policy, hashes with bcrypt through PasswordHasher, and performs the local
# credential check that precedes a login.
# 🔗 Dependencies:
# User domain model, MongoRepository, PasswordHasher, core exceptions
# 🔄 Connected Modules / Calls From:
# GraphQL resolvers, auth API (login), presentation dependencies

import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from chatter.shared.core.exceptions import AuthenticationError, NotFoundError, ValidationError
from chatter.shared.core.security import PasswordHasher, validate_password_strength
from chatter.shared.infrastructure.database.repository import MongoRepository

from ..models.user import User, UserCreateData, UserUpdateData

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Credentials are not valid"


class UsersService:
    """
    Domain service for user management business logic.

    Passwords are accepted in plaintext, checked against the password policy
    and stored only as bcrypt digests.
    """

    def __init__(
        self,
        user_repository: MongoRepository[User],
        password_hasher: PasswordHasher,
    ):
        self.user_repository = user_repository
        self.password_hasher = password_hasher

    # =========================================================================
    # USER CRUD
    # =========================================================================

    async def create(self, email: str, password: str) -> User:
        """
        Create a new user account.

        Raises:
            ValidationError: If the email or password is rejected
            DuplicateResourceError: If the email is already registered
        """
        try:
            data = UserCreateData(email=email.strip(), password=password)
        except PydanticValidationError as e:
            raise ValidationError("Invalid email format", field="email", value=email) from e

        self._check_password(data.password)

        user = await self.user_repository.create({
            "email": _normalize_email(data.email),
            "password_hash": self.password_hasher.hash(data.password),
        })
        logger.info(f"User created successfully: {user.id}")
        return user

    async def find_all(self) -> List[User]:
        return await self.user_repository.find({})

    async def find_one(self, user_id: str) -> User:
        return await self.user_repository.find_one({"_id": user_id})

    async def update(
        self,
        user_id: str,
        email: Optional[str] = None,
        password: Optional[str] = None,
    ) -> User:
        """
        Update the provided fields of a user; a new password is re-hashed.

        Raises:
            ValidationError: If nothing is provided or a value is rejected
            NotFoundError: If the user does not exist
        """
        provided: Dict[str, Any] = {}
        if email is not None:
            provided["email"] = email.strip()
        if password is not None:
            provided["password"] = password
        if not provided:
            raise ValidationError("Update must change at least one field")

        try:
            data = UserUpdateData(**provided)
        except PydanticValidationError as e:
            raise ValidationError("Invalid email format", field="email", value=email) from e

        changes: Dict[str, Any] = {}
        if data.email is not None:
            changes["email"] = _normalize_email(data.email)
        if data.password is not None:
            self._check_password(data.password)
            changes["password_hash"] = self.password_hasher.hash(data.password)

        user = await self.user_repository.find_one_and_update(
            {"_id": user_id},
            {"$set": changes},
        )
        logger.info(f"User updated: {user.id} (fields: {', '.join(sorted(changes))})")
        return user

    async def remove(self, user_id: str) -> User:
        user = await self.user_repository.find_one_and_delete({"_id": user_id})
        logger.info(f"User removed: {user.id}")
        return user

    # =========================================================================
    # CREDENTIALS
    # =========================================================================

    async def verify_user(self, email: str, password: str) -> User:
        """
        Check credentials before a login.

        Unknown email and wrong password fail identically.

        Raises:
            AuthenticationError: If the credentials do not match a user
        """
        try:
            user = await self.user_repository.find_one({"email": _normalize_email(email)})
        except NotFoundError as e:
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE) from e

        if not self.password_hasher.verify(password, user.password_hash):
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)
        return user

    def _check_password(self, password: str) -> None:
        is_valid, errors = validate_password_strength(password)
        if not is_valid:
            raise ValidationError(
                "Password does not meet requirements",
                field="password",
                details={"requirements": errors},
            )


def _normalize_email(email: str) -> str:
    return email.strip().lower()

# 📄 File: chatter/shared/infrastructure/database/entity.py
# 🧭 Purpose (Layman Explanation):
# Describes what every saved record looks like: a permanent ID that is handed out
# once when the record is created, plus whatever information that kind of record holds.
# 🧪 Purpose (Technical Summary):
# Pydantic base model for MongoDB-backed entities with a frozen ObjectId identifier stored
# under ``_id``, plus strict identifier parsing used by the repository filters.
# 🔗 Dependencies:
# pydantic, bson (pymongo)
# 🔄 Connected Modules / Calls From:
# chatter.shared.infrastructure.database.repository, domain models in every module

from typing import Any, Dict

from bson import ObjectId
from bson.errors import InvalidId
from pydantic import BaseModel, ConfigDict, Field

from chatter.shared.core.exceptions import InvalidIdentifierError


def parse_object_id(value: Any, field: str = "_id") -> ObjectId:
    """
    Convert a client-supplied identifier into an ObjectId.

    Args:
        value: ObjectId instance or 24-character hex string
        field: Field name reported when the value is rejected

    Returns:
        ObjectId: Parsed identifier

    Raises:
        InvalidIdentifierError: If the value is not a valid ObjectId
    """
    if isinstance(value, ObjectId):
        return value
    # ObjectId() also accepts 12-byte values; only the hex form is a public identifier
    if not isinstance(value, str) or len(value) != 24:
        raise InvalidIdentifierError(value, field=field)
    try:
        return ObjectId(value)
    except InvalidId as e:
        raise InvalidIdentifierError(value, field=field) from e


class Entity(BaseModel):
    """
    Base class for every persisted document.

    The identifier is generated client-side by the repository at creation
    time and cannot be reassigned afterwards.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
        validate_assignment=True,
        extra="ignore",
    )

    id: ObjectId = Field(alias="_id", frozen=True)

    def to_document(self) -> Dict[str, Any]:
        """Storage representation: ``_id`` plus every domain field."""
        return self.model_dump(by_alias=True)

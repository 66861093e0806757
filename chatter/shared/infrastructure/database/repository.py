# 📄 File: chatter/shared/infrastructure/database/repository.py
# 🧭 Purpose (Layman Explanation):
# One reusable "filing clerk" that can save, look up, change and remove records in any
# MongoDB collection, and always answers the same way when a record cannot be found.
#
# 🧪 Purpose (Technical Summary):
# Generic, collection-bound repository parameterised by an Entity model. Provides create,
# find_one, find, find_one_and_update and find_one_and_delete with uniform NotFound semantics,
# strict identifier parsing and store-failure translation. Atomic find-and-mutate operations
# are delegated to MongoDB's own primitives.
#
# 🔗 Dependencies:
# - motor (AsyncIOMotorCollection)
# - pymongo (ReturnDocument, error types), bson (ObjectId)
# - pydantic (entity validation)
# - chatter.shared.core.exceptions
#
# 🔄 Connected Modules / Calls From:
# - chatter.modules.user_management.infrastructure.database.user_repository (users binding)
# - chatter.modules.user_management.domain.services.user_service

"""
Generic MongoDB Repository

Each entity gets its own ``MongoRepository`` instance bound to one collection
and one entity class; there are no per-entity subclasses.

Contract:
- ``find_one``, ``find_one_and_update`` and ``find_one_and_delete`` raise
  ``NotFoundError`` when nothing matches, after logging the filter.
- ``find`` returns an empty list when nothing matches.
- Update operations return the post-update document, delete returns the
  pre-deletion document.
- String identifiers in filters are parsed up front; malformed ones raise
  ``InvalidIdentifierError`` before the store is contacted.
- Transport failures surface as ``StoreUnavailableError``; nothing is retried.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Generic, Iterator, List, Mapping, Type, TypeVar, Union

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from pymongo import ReturnDocument
from pymongo.errors import ConnectionFailure, DuplicateKeyError

from chatter.shared.core.exceptions import (
    CorruptDocumentError,
    DuplicateResourceError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)
from chatter.shared.infrastructure.database.entity import Entity, parse_object_id

EntityT = TypeVar("EntityT", bound=Entity)

FilterQuery = Mapping[str, Any]
UpdateQuery = Union[Mapping[str, Any], BaseModel]

_IDENTIFIER_KEYS = ("_id", "id")
_ID_SCALAR_OPERATORS = ("$eq", "$ne")
_ID_LIST_OPERATORS = ("$in", "$nin")
_VALUE_OPERATORS = ("$set", "$setOnInsert")


class MongoRepository(Generic[EntityT]):
    """
    Collection-bound data access for one entity type.

    Args:
        collection: Motor collection the repository reads and writes
        model_cls: Entity class documents are validated into
    """

    def __init__(self, collection: AsyncIOMotorCollection, model_cls: Type[EntityT]):
        self._collection = collection
        self.model_cls = model_cls
        self.logger = logging.getLogger(f"{__name__}.{model_cls.__name__}")

    @property
    def collection_name(self) -> str:
        return self._collection.name

    # =========================================================================
    # CRUD OPERATIONS
    # =========================================================================

    async def create(self, fields: Union[Mapping[str, Any], BaseModel]) -> EntityT:
        """
        Persist a new entity with a freshly generated identifier.

        Args:
            fields: Every domain field of the entity, without an identifier

        Returns:
            EntityT: The persisted entity, identifier included

        Raises:
            ValidationError: If the fields do not form a valid entity
            DuplicateResourceError: If a unique index rejects the document
            StoreUnavailableError: If the store cannot be reached
        """
        if isinstance(fields, BaseModel):
            fields = fields.model_dump()
        if any(key in fields for key in _IDENTIFIER_KEYS):
            raise ValidationError(
                "Identifier is assigned by the repository",
                field="_id",
            )

        try:
            entity = self.model_cls.model_validate({**fields, "_id": ObjectId()})
        except PydanticValidationError as e:
            raise ValidationError(
                f"Invalid {self.model_cls.__name__} fields",
                details={"errors": _format_validation_errors(e)},
            ) from e

        with self._store_errors("insert_one"):
            try:
                await self._collection.insert_one(entity.to_document())
            except DuplicateKeyError as e:
                self.logger.warning(f"Duplicate key on insert into {self.collection_name}: {e.details}")
                raise DuplicateResourceError(
                    f"{self.model_cls.__name__} already exists",
                    resource_type=self.model_cls.__name__,
                ) from e

        self.logger.info(f"Created {self.model_cls.__name__} with ID: {entity.id}")
        return entity

    async def find_one(self, filter_query: FilterQuery) -> EntityT:
        """
        Return the first document matching the filter.

        An empty filter matches any document; callers needing a specific
        document must supply a filter that identifies it.

        Raises:
            NotFoundError: If no document matches
            InvalidIdentifierError: If the filter carries a malformed identifier
        """
        query = self._normalize_filter(filter_query)

        with self._store_errors("find_one"):
            document = await self._collection.find_one(query)

        if document is None:
            self._raise_not_found(query)
        return self._to_entity(document)

    async def find(self, filter_query: FilterQuery) -> List[EntityT]:
        """
        Return every document matching the filter, or an empty list.
        """
        query = self._normalize_filter(filter_query)

        with self._store_errors("find"):
            documents = await self._collection.find(query).to_list(length=None)

        self.logger.debug(f"Found {len(documents)} documents in {self.collection_name}")
        return [self._to_entity(document) for document in documents]

    async def find_one_and_update(
        self,
        filter_query: FilterQuery,
        update: UpdateQuery,
    ) -> EntityT:
        """
        Atomically update the first matching document and return its new state.

        A plain mapping of fields is applied as a partial ``$set``; a mapping of
        update operators (``$set``, ``$unset``, ...) is passed to the store once every
        field it names is declared on the entity. Values under ``$set`` and
        ``$setOnInsert`` are validated against the entity before the store is touched.

        Raises:
            NotFoundError: If no document matches
            ValidationError: If the update is empty, unknown, mistyped or touches the identifier
            CorruptDocumentError: If the stored document no longer forms a valid entity
        """
        query = self._normalize_filter(filter_query)
        update_document = self._normalize_update(update)

        with self._store_errors("find_one_and_update"):
            try:
                document = await self._collection.find_one_and_update(
                    query,
                    update_document,
                    return_document=ReturnDocument.AFTER,
                )
            except DuplicateKeyError as e:
                self.logger.warning(f"Duplicate key on update in {self.collection_name}: {e.details}")
                raise DuplicateResourceError(
                    f"{self.model_cls.__name__} already exists",
                    resource_type=self.model_cls.__name__,
                ) from e

        if document is None:
            self._raise_not_found(query)

        entity = self._to_entity(document)
        self.logger.info(f"Updated {self.model_cls.__name__} with ID: {entity.id}")
        return entity

    async def find_one_and_delete(self, filter_query: FilterQuery) -> EntityT:
        """
        Atomically remove the first matching document and return it as it was
        immediately before deletion.

        Raises:
            NotFoundError: If no document matches
        """
        query = self._normalize_filter(filter_query)

        with self._store_errors("find_one_and_delete"):
            document = await self._collection.find_one_and_delete(query)

        if document is None:
            self._raise_not_found(query)

        entity = self._to_entity(document)
        self.logger.info(f"Deleted {self.model_cls.__name__} with ID: {entity.id}")
        return entity

    # =========================================================================
    # HELPERS
    # =========================================================================

    @contextmanager
    def _store_errors(self, operation: str) -> Iterator[None]:
        try:
            yield
        except ConnectionFailure as e:
            self.logger.error(f"Store unavailable during {operation} on {self.collection_name}: {e}")
            raise StoreUnavailableError(operation=operation) from e

    def _raise_not_found(self, query: Dict[str, Any]) -> None:
        self.logger.warning(f"Document was not found with filter: {query}")
        raise NotFoundError(
            resource_type=self.model_cls.__name__,
            filter_query=query,
        )

    def _to_entity(self, document: Mapping[str, Any]) -> EntityT:
        try:
            return self.model_cls.model_validate(document)
        except PydanticValidationError as e:
            self.logger.error(f"Stored document {document.get('_id')} in {self.collection_name} is invalid: {e}")
            raise CorruptDocumentError(
                resource_type=self.model_cls.__name__,
                errors=_format_validation_errors(e),
            ) from e

    def _normalize_filter(self, filter_query: FilterQuery) -> Dict[str, Any]:
        query: Dict[str, Any] = {}
        for key, value in filter_query.items():
            if key in _IDENTIFIER_KEYS:
                query["_id"] = _normalize_identifier_condition(value)
            else:
                query[key] = value
        return query

    def _normalize_update(self, update: UpdateQuery) -> Dict[str, Any]:
        if isinstance(update, BaseModel):
            update = update.model_dump(exclude_unset=True)
        if not update:
            raise ValidationError("Update must change at least one field")

        operator_keys = [key for key in update if key.startswith("$")]
        if operator_keys and len(operator_keys) != len(update):
            raise ValidationError("Update cannot mix operators and plain fields")

        requested = dict(update) if operator_keys else {"$set": dict(update)}

        update_document: Dict[str, Any] = {}
        for operator, fields in requested.items():
            if not isinstance(fields, Mapping) or not fields:
                raise ValidationError(f"Update operator {operator} needs at least one field")
            if any(field in _IDENTIFIER_KEYS for field in fields):
                raise ValidationError(
                    "Entity identifier is immutable",
                    field="_id",
                    constraint="immutable",
                )

            unknown = [field for field in fields if field.split(".")[0] not in self.model_cls.model_fields]
            if unknown:
                raise ValidationError(
                    f"Unknown {self.model_cls.__name__} fields: {', '.join(sorted(unknown))}",
                    constraint="known fields only",
                )

            if operator in _VALUE_OPERATORS:
                fields = self._validate_field_values(fields)
            update_document[operator] = dict(fields)
        return update_document

    def _validate_field_values(self, fields: Mapping[str, Any]) -> Dict[str, Any]:
        # Assignment on a bare instance runs each field's own validator only
        scratch = self.model_cls.model_construct()
        validated: Dict[str, Any] = {}
        errors: List[str] = []
        for field, value in fields.items():
            if "." in field:
                validated[field] = value
                continue
            try:
                setattr(scratch, field, value)
            except PydanticValidationError as e:
                errors.extend(_format_validation_errors(e))
                continue
            validated[field] = scratch.model_dump(include={field})[field]

        if errors:
            raise ValidationError(
                f"Invalid {self.model_cls.__name__} field values",
                details={"errors": errors},
            )
        return validated


def _normalize_identifier_condition(value: Any) -> Any:
    if isinstance(value, Mapping):
        condition = {}
        for operator, operand in value.items():
            if operator in _ID_SCALAR_OPERATORS:
                operand = parse_object_id(operand)
            elif operator in _ID_LIST_OPERATORS:
                operand = [parse_object_id(item) for item in operand]
            condition[operator] = operand
        return condition
    return parse_object_id(value)


def _format_validation_errors(error: PydanticValidationError) -> List[str]:
    return [
        f"{'.'.join(str(part) for part in item['loc'])}: {item['msg']}"
        for item in error.errors()
    ]

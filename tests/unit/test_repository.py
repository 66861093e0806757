"""
Tests for the generic MongoDB repository, run against mongomock-motor
with a small entity so nothing user-specific leaks in.
"""

import asyncio
import logging
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from pymongo.errors import AutoReconnect, ServerSelectionTimeoutError

from chatter.shared.core.exceptions import (
    CorruptDocumentError,
    DuplicateResourceError,
    InvalidIdentifierError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)
from chatter.shared.infrastructure.database.entity import Entity
from chatter.shared.infrastructure.database.repository import MongoRepository


class Note(Entity):
    title: str
    body: str = ""
    views: int = 0


@pytest.fixture
def notes(mongo_db):
    return mongo_db["notes"]


@pytest.fixture
def repository(notes) -> MongoRepository[Note]:
    return MongoRepository(notes, Note)


@pytest.fixture
def unreachable_collection():
    collection = MagicMock()
    collection.name = "notes"
    error = ServerSelectionTimeoutError("No servers available")
    collection.insert_one = AsyncMock(side_effect=error)
    collection.find_one = AsyncMock(side_effect=error)
    collection.find.return_value.to_list = AsyncMock(side_effect=error)
    collection.find_one_and_update = AsyncMock(side_effect=error)
    collection.find_one_and_delete = AsyncMock(side_effect=error)
    return collection


class TestCreate:
    async def test_assigns_identifier_and_persists(self, repository, notes):
        note = await repository.create({"title": "first", "body": "hello"})

        assert isinstance(note.id, ObjectId)
        stored = await notes.find_one({"_id": note.id})
        assert stored == {"_id": note.id, "title": "first", "body": "hello", "views": 0}

    async def test_each_create_gets_a_distinct_identifier(self, repository):
        first = await repository.create({"title": "a"})
        second = await repository.create({"title": "a"})

        assert first.id != second.id

    async def test_rejects_caller_supplied_identifier(self, repository, notes):
        with pytest.raises(ValidationError):
            await repository.create({"_id": ObjectId(), "title": "x"})
        with pytest.raises(ValidationError):
            await repository.create({"id": str(ObjectId()), "title": "x"})

        assert await notes.count_documents({}) == 0

    async def test_rejects_incomplete_fields(self, repository, notes):
        with pytest.raises(ValidationError) as exc_info:
            await repository.create({"body": "no title"})

        assert any("title" in error for error in exc_info.value.details["errors"])
        assert await notes.count_documents({}) == 0

    async def test_unique_index_violation_raises_duplicate(self, repository, notes):
        await notes.create_index("title", unique=True)
        await repository.create({"title": "taken"})

        with pytest.raises(DuplicateResourceError) as exc_info:
            await repository.create({"title": "taken"})

        assert exc_info.value.status_code == 409

    async def test_store_failure_raises_unavailable(self, unreachable_collection):
        repository = MongoRepository(unreachable_collection, Note)

        with pytest.raises(StoreUnavailableError) as exc_info:
            await repository.create({"title": "x"})

        assert isinstance(exc_info.value.__cause__, ServerSelectionTimeoutError)


class TestFindOne:
    async def test_finds_by_string_identifier(self, repository):
        created = await repository.create({"title": "first"})

        found = await repository.find_one({"_id": str(created.id)})

        assert found == created

    async def test_finds_by_object_id_and_id_alias(self, repository):
        created = await repository.create({"title": "first"})

        assert await repository.find_one({"_id": created.id}) == created
        assert await repository.find_one({"id": str(created.id)}) == created

    async def test_finds_by_domain_field(self, repository):
        await repository.create({"title": "first"})
        second = await repository.create({"title": "second"})

        assert await repository.find_one({"title": "second"}) == second

    async def test_missing_document_raises_not_found_and_logs_filter(self, repository, caplog):
        missing_id = ObjectId()

        with caplog.at_level(logging.WARNING):
            with pytest.raises(NotFoundError) as exc_info:
                await repository.find_one({"_id": missing_id})

        assert exc_info.value.message == "Document not found"
        assert exc_info.value.details["filter"] == {"_id": str(missing_id)}
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert any(
            "Document was not found with filter" in r.getMessage() and str(missing_id) in r.getMessage()
            for r in warnings
        )

    async def test_malformed_identifier_never_reaches_store(self):
        collection = MagicMock()
        collection.name = "notes"
        collection.find_one = AsyncMock()
        repository = MongoRepository(collection, Note)

        with pytest.raises(InvalidIdentifierError):
            await repository.find_one({"_id": "not-an-id"})

        collection.find_one.assert_not_awaited()

    async def test_store_failure_raises_unavailable(self, unreachable_collection):
        repository = MongoRepository(unreachable_collection, Note)

        with pytest.raises(StoreUnavailableError) as exc_info:
            await repository.find_one({"title": "x"})

        assert exc_info.value.status_code == 503
        assert exc_info.value.details["operation"] == "find_one"


class TestFind:
    async def test_returns_every_match(self, repository):
        a = await repository.create({"title": "a", "views": 1})
        b = await repository.create({"title": "b", "views": 1})
        await repository.create({"title": "c", "views": 2})

        found = await repository.find({"views": 1})

        assert sorted(note.id for note in found) == sorted([a.id, b.id])

    async def test_empty_filter_returns_all(self, repository):
        for title in ("a", "b", "c"):
            await repository.create({"title": title})

        assert len(await repository.find({})) == 3

    async def test_no_match_returns_empty_list(self, repository):
        await repository.create({"title": "a"})

        assert await repository.find({"title": "zzz"}) == []

    async def test_identifier_operators_are_parsed(self, repository):
        a = await repository.create({"title": "a"})
        b = await repository.create({"title": "b"})
        await repository.create({"title": "c"})

        found = await repository.find({"_id": {"$in": [str(a.id), str(b.id)]}})

        assert sorted(note.title for note in found) == ["a", "b"]

    async def test_malformed_identifier_inside_operator_is_rejected(self, repository):
        with pytest.raises(InvalidIdentifierError):
            await repository.find({"_id": {"$in": [str(ObjectId()), "bad"]}})

    async def test_store_failure_raises_unavailable(self, unreachable_collection):
        repository = MongoRepository(unreachable_collection, Note)

        with pytest.raises(StoreUnavailableError) as exc_info:
            await repository.find({"title": "x"})

        assert exc_info.value.details["operation"] == "find"

    async def test_invalid_stored_document_raises_corrupt_document(self, repository, notes):
        await notes.insert_one({"_id": ObjectId(), "title": "legacy", "views": "many"})

        with pytest.raises(CorruptDocumentError) as exc_info:
            await repository.find({})

        assert exc_info.value.details["resource_type"] == "Note"
        assert any("views" in error for error in exc_info.value.details["errors"])


class TestFindOneAndUpdate:
    async def test_returns_post_update_document(self, repository):
        created = await repository.create({"title": "draft", "body": "keep me"})

        updated = await repository.find_one_and_update({"_id": str(created.id)}, {"title": "final"})

        assert updated.id == created.id
        assert updated.title == "final"
        assert updated.body == "keep me"
        assert await repository.find_one({"_id": created.id}) == updated

    async def test_passes_operator_documents_through(self, repository):
        created = await repository.create({"title": "counter"})

        updated = await repository.find_one_and_update({"_id": created.id}, {"$inc": {"views": 5}})

        assert updated.views == 5

    async def test_missing_document_raises_not_found_without_insert(self, repository, notes):
        with pytest.raises(NotFoundError):
            await repository.find_one_and_update({"_id": ObjectId()}, {"title": "x"})

        assert await notes.count_documents({}) == 0

    @pytest.mark.parametrize(
        "update",
        [
            {},
            {"$set": {}},
            {"_id": ObjectId()},
            {"$set": {"_id": ObjectId()}},
            {"$set": {"id": "abc"}},
            {"unknown_field": 1},
            {"$set": {"unknown_field": 1}},
            {"$setOnInsert": {"unknown_field": 1}},
            {"$inc": {"unknown_field": 1}},
            {"views": "not-a-number"},
            {"$set": {"views": "not-a-number"}},
            {"$set": {"title": "x"}, "body": "y"},
        ],
    )
    async def test_rejects_illegal_updates(self, repository, update):
        created = await repository.create({"title": "stable"})

        with pytest.raises(ValidationError):
            await repository.find_one_and_update({"_id": created.id}, update)

        assert await repository.find_one({"_id": created.id}) == created

    async def test_mistyped_value_is_not_written(self, repository, notes):
        created = await repository.create({"title": "stable", "views": 3})

        with pytest.raises(ValidationError) as exc_info:
            await repository.find_one_and_update({"_id": created.id}, {"views": "not-a-number"})

        assert any("views" in error for error in exc_info.value.details["errors"])
        stored = await notes.find_one({"_id": created.id})
        assert stored["views"] == 3
        assert await repository.find({}) == [created]

    async def test_set_values_are_coerced_to_field_types(self, repository, notes):
        created = await repository.create({"title": "counter"})

        updated = await repository.find_one_and_update({"_id": created.id}, {"$set": {"views": "7"}})

        assert updated.views == 7
        assert (await notes.find_one({"_id": created.id}))["views"] == 7

    async def test_concurrent_increments_are_not_lost(self, repository):
        created = await repository.create({"title": "counter"})

        await asyncio.gather(*[
            repository.find_one_and_update({"_id": created.id}, {"$inc": {"views": 1}})
            for _ in range(20)
        ])

        assert (await repository.find_one({"_id": created.id})).views == 20

    async def test_store_failure_raises_unavailable(self, unreachable_collection):
        repository = MongoRepository(unreachable_collection, Note)

        with pytest.raises(StoreUnavailableError):
            await repository.find_one_and_update({"title": "x"}, {"title": "y"})


class TestFindOneAndDelete:
    async def test_returns_pre_deletion_document(self, repository):
        created = await repository.create({"title": "doomed", "body": "last words"})

        deleted = await repository.find_one_and_delete({"_id": str(created.id)})

        assert deleted == created
        with pytest.raises(NotFoundError):
            await repository.find_one({"_id": created.id})

    async def test_missing_document_raises_not_found(self, repository):
        with pytest.raises(NotFoundError):
            await repository.find_one_and_delete({"_id": ObjectId()})

    async def test_concurrent_deletes_succeed_exactly_once(self, repository):
        created = await repository.create({"title": "doomed"})

        results = await asyncio.gather(
            *[repository.find_one_and_delete({"_id": created.id}) for _ in range(5)],
            return_exceptions=True,
        )

        deleted = [r for r in results if isinstance(r, Note)]
        missing = [r for r in results if isinstance(r, NotFoundError)]
        assert len(deleted) == 1
        assert len(missing) == 4

    async def test_transport_error_raises_unavailable(self):
        collection = MagicMock()
        collection.name = "notes"
        collection.find_one_and_delete = AsyncMock(side_effect=AutoReconnect("connection reset"))
        repository = MongoRepository(collection, Note)

        with pytest.raises(StoreUnavailableError) as exc_info:
            await repository.find_one_and_delete({"title": "x"})

        assert isinstance(exc_info.value.__cause__, AutoReconnect)

import pytest
from bson import ObjectId
from pydantic import ValidationError as PydanticValidationError

from chatter.shared.core.exceptions import InvalidIdentifierError
from chatter.shared.infrastructure.database.entity import Entity, parse_object_id


class Note(Entity):
    title: str


class TestParseObjectId:
    def test_accepts_object_id(self):
        oid = ObjectId()
        assert parse_object_id(oid) is oid

    def test_parses_hex_string(self):
        oid = ObjectId()
        assert parse_object_id(str(oid)) == oid

    @pytest.mark.parametrize(
        "value",
        ["", "not-an-id", "zzzzzzzzzzzzzzzzzzzzzzzz", "abcdefabcdef", 42, None, b"123456789012"],
    )
    def test_rejects_malformed_values(self, value):
        with pytest.raises(InvalidIdentifierError) as exc_info:
            parse_object_id(value)

        assert exc_info.value.status_code == 400
        assert exc_info.value.error_code == "INVALID_IDENTIFIER"
        assert exc_info.value.details["field"] == "_id"


class TestEntity:
    def test_populates_from_storage_document(self):
        oid = ObjectId()
        note = Note.model_validate({"_id": oid, "title": "hello"})

        assert note.id == oid
        assert note.to_document() == {"_id": oid, "title": "hello"}

    def test_populates_by_field_name(self):
        oid = ObjectId()
        assert Note(id=oid, title="hello").id == oid

    def test_identifier_cannot_be_reassigned(self):
        note = Note(id=ObjectId(), title="hello")

        with pytest.raises(PydanticValidationError):
            note.id = ObjectId()

    def test_identifier_is_required(self):
        with pytest.raises(PydanticValidationError):
            Note.model_validate({"title": "hello"})

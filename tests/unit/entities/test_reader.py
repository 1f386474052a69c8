"""Unit tests for the reader entity package.

Repository tests run against an in-memory SQLite database.
"""

import asyncio
from uuid import UUID

import pytest

from src.library.core.errors import (
    PresenceViolationError,
    RecordNotFoundError,
    ValidationViolationError,
)
from src.library.entities.reader import Reader, ReaderPayload, ReaderRepository


class TestReader:
    def test_reader_creation_with_defaults(self):
        reader = Reader(name="Jane", email="jane@example.com", password="123456789")

        UUID(reader.id)
        assert reader.created_at is not None
        assert reader.updated_at is not None

    def test_password_not_in_repr(self):
        reader = Reader(name="Jane", email="jane@example.com", password="123456789")
        assert "123456789" not in repr(reader)

    def test_reader_equality_ignores_timestamps(self):
        first = Reader(id="1", name="Jane", email="jane@example.com", password="123456789")
        second = Reader(id="1", name="Jane", email="jane@example.com", password="123456789")

        assert first == second
        assert hash(first) == hash(second)


class TestReaderPayload:
    def test_unset_fields_are_excluded(self):
        payload = ReaderPayload.model_validate({"email": "new@x.com"})
        assert payload.model_dump(exclude_unset=True) == {"email": "new@x.com"}

    def test_explicit_null_is_kept(self):
        payload = ReaderPayload.model_validate({"name": None})
        assert payload.model_dump(exclude_unset=True) == {"name": None}

    def test_unknown_and_generated_keys_dropped(self):
        payload = ReaderPayload.model_validate({"id": "x", "role": "admin", "name": "Jane"})
        assert payload.model_dump(exclude_unset=True) == {"name": "Jane"}


class TestReaderRepository:
    @pytest.mark.asyncio
    async def test_create_and_get(self, session, reader_data):
        repository = ReaderRepository(session)
        data = reader_data()

        created = await repository.create(data)
        fetched = await repository.get(created.id)

        assert fetched == created
        assert fetched.password == "123456789"

    @pytest.mark.asyncio
    async def test_create_ignores_client_supplied_id(self, session, reader_data):
        repository = ReaderRepository(session)

        created = await repository.create(reader_data(id="chosen-by-client"))

        assert created.id != "chosen-by-client"

    @pytest.mark.asyncio
    async def test_create_rejects_missing_password(self, session, reader_data):
        repository = ReaderRepository(session)
        data = reader_data()
        del data["password"]

        with pytest.raises(PresenceViolationError):
            await repository.create(data)
        assert await repository.list_all() == []

    @pytest.mark.asyncio
    async def test_duplicate_email_is_validation_error(self, session, reader_data):
        repository = ReaderRepository(session)
        await repository.create(reader_data(email="dup@example.com"))

        with pytest.raises(ValidationViolationError) as exc_info:
            await repository.create(reader_data(email="dup@example.com"))

        assert exc_info.value.message == "Validation error: Email must be unique"
        assert len(await repository.list_all()) == 1

    @pytest.mark.asyncio
    async def test_get_missing_raises_not_found(self, session):
        with pytest.raises(RecordNotFoundError) as exc_info:
            await ReaderRepository(session).get("12345")

        assert exc_info.value.message == "The reader could not be found."

    @pytest.mark.asyncio
    async def test_list_all_in_insertion_order(self, session, reader_data):
        repository = ReaderRepository(session)
        created = [await repository.create(reader_data()) for _ in range(3)]

        listed = await repository.list_all()

        assert [r.id for r in listed] == [r.id for r in created]

    @pytest.mark.asyncio
    async def test_update_changes_only_supplied_fields(self, session, reader_data):
        repository = ReaderRepository(session)
        original = await repository.create(reader_data())
        await asyncio.sleep(0.001)

        updated = await repository.update(original.id, {"email": "miss_e_bennet@gmail.com"})

        assert updated.email == "miss_e_bennet@gmail.com"
        assert updated.name == original.name
        assert updated.password == original.password
        assert updated.updated_at > original.updated_at
        assert updated.created_at == original.created_at

    @pytest.mark.asyncio
    async def test_update_validates_supplied_fields(self, session, reader_data):
        repository = ReaderRepository(session)
        original = await repository.create(reader_data())

        with pytest.raises(ValidationViolationError):
            await repository.update(original.id, {"password": "short"})

        assert (await repository.get(original.id)).password == "123456789"

    @pytest.mark.asyncio
    async def test_update_missing_raises_not_found(self, session):
        with pytest.raises(RecordNotFoundError):
            await ReaderRepository(session).update("12345", {"email": "a@b.com"})

    @pytest.mark.asyncio
    async def test_update_to_taken_email(self, session, reader_data):
        repository = ReaderRepository(session)
        await repository.create(reader_data(email="taken@example.com"))
        other = await repository.create(reader_data())

        with pytest.raises(ValidationViolationError, match="Email must be unique"):
            await repository.update(other.id, {"email": "taken@example.com"})

    @pytest.mark.asyncio
    async def test_delete_twice(self, session, reader_data):
        repository = ReaderRepository(session)
        reader = await repository.create(reader_data())

        await repository.delete(reader.id)

        with pytest.raises(RecordNotFoundError):
            await repository.get(reader.id)
        with pytest.raises(RecordNotFoundError):
            await repository.delete(reader.id)

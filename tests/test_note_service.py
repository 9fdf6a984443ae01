"""
Notes API — Note Service Unit Tests
====================================

What:  Tests for NoteService business logic (list, create, update, delete).
How:   Runs the service against real NoteStore/UserStore instances over an
       in-memory SQLite database; store failures are simulated with mocks.

What we test:
    ✅ Validation order and messages for every operation
    ✅ Duplicate-title rules (exact match, any owner, own title allowed)
    ✅ completed must be a real boolean, False included
    ✅ Batched username join, including notes whose owner is gone
    ✅ Store failures wrapped in DatabaseError
"""

import pytest
from unittest.mock import AsyncMock, patch
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from notes_api.exceptions import (
    ConflictError,
    DatabaseError,
    EmptyResultError,
    NotFoundError,
    ValidationError,
)
from notes_api.models.note import Note


async def _create(service, user="u1", title="Buy milk", text="2%"):
    await service.create_note(user=user, title=title, text=text)
    return await service.notes.find_by_title(title)


class TestNoteServiceList:
    """Tests for list_notes."""

    @pytest.mark.asyncio
    async def test_list_notes_empty_raises(self, note_service):
        """An empty store is an error, never an empty array."""
        with pytest.raises(EmptyResultError, match="No notes found"):
            await note_service.list_notes()

    @pytest.mark.asyncio
    async def test_list_notes_attaches_username(self, note_service, users):
        await _create(note_service, user="u1", title="First", text="a")
        await _create(note_service, user="u2", title="Second", text="b")

        result = await note_service.list_notes()

        by_title = {item.title: item for item in result}
        assert set(by_title) == {"First", "Second"}
        assert by_title["First"].username == "alice"
        assert by_title["Second"].username == "bob"
        assert by_title["First"].user == "u1"
        assert by_title["First"].text == "a"
        assert by_title["First"].completed is False
        assert by_title["First"].id

    @pytest.mark.asyncio
    async def test_list_notes_single_batched_user_lookup(self, note_service, users):
        for i in range(5):
            await _create(note_service, user="u1" if i % 2 else "u2", title=f"note-{i}")

        with patch.object(
            note_service.users, "find_by_ids", wraps=note_service.users.find_by_ids
        ) as spy:
            result = await note_service.list_notes()

        assert len(result) == 5
        spy.assert_called_once()
        assert set(spy.call_args.args[0]) == {"u1", "u2"}

    @pytest.mark.asyncio
    async def test_list_notes_owner_missing_gives_null_username(
        self, note_service, users, db_session
    ):
        """A note whose user was removed is still listed, without a username."""
        db_session.add(Note(user="ghost", title="Orphan", text="x"))
        await db_session.flush()

        result = await note_service.list_notes()

        assert len(result) == 1
        assert result[0].title == "Orphan"
        assert result[0].username is None

    @pytest.mark.asyncio
    async def test_list_notes_database_failure(self, note_service):
        note_service.notes.find_all = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("connection lost"))
        )
        with pytest.raises(DatabaseError):
            await note_service.list_notes()


class TestNoteServiceCreate:
    """Tests for create_note."""

    @pytest.mark.asyncio
    async def test_create_note_success(self, note_service, users):
        result = await note_service.create_note(user="u1", title="Buy milk", text="2%")

        assert result.message == "New note created: Buy milk"
        note = await note_service.notes.find_by_title("Buy milk")
        assert note.user == "u1"
        assert note.text == "2%"
        assert note.completed is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "fields",
        [
            {"user": None, "title": "t", "text": "x"},
            {"user": "u1", "title": None, "text": "x"},
            {"user": "u1", "title": "t", "text": None},
            {"user": "u1", "title": "", "text": "x"},
        ],
    )
    async def test_create_note_missing_field(self, note_service, users, fields):
        with pytest.raises(ValidationError, match="All fields are required"):
            await note_service.create_note(**fields)

    @pytest.mark.asyncio
    async def test_create_note_missing_field_checked_before_user(self, note_service):
        """Validation fires even when the user would not resolve either."""
        note_service.users.find_by_id = AsyncMock()
        with pytest.raises(ValidationError):
            await note_service.create_note(user="nobody", title="t", text="")
        note_service.users.find_by_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_note_unknown_user(self, note_service, users):
        with pytest.raises(NotFoundError, match="User not found"):
            await note_service.create_note(user="nobody", title="Fresh", text="x")

    @pytest.mark.asyncio
    async def test_create_note_duplicate_title_other_user(self, note_service, users):
        await _create(note_service, user="u1", title="Shared")

        with pytest.raises(ConflictError, match="Duplicate note title"):
            await note_service.create_note(user="u2", title="Shared", text="y")

    @pytest.mark.asyncio
    async def test_create_note_title_match_is_case_sensitive(self, note_service, users):
        await _create(note_service, title="Shared")
        result = await note_service.create_note(user="u1", title="shared", text="y")
        assert result.message == "New note created: shared"

    @pytest.mark.asyncio
    async def test_create_note_race_hits_unique_constraint(self, note_service, users):
        """If the duplicate check is raced, the unique index still yields a conflict."""
        await _create(note_service, title="Raced")

        note_service.notes.find_by_title = AsyncMock(return_value=None)
        with pytest.raises(ConflictError):
            await note_service.create_note(user="u2", title="Raced", text="y")

    @pytest.mark.asyncio
    async def test_create_note_store_returns_nothing(self, note_service, users):
        note_service.notes.create = AsyncMock(return_value=None)
        with pytest.raises(ValidationError, match="Invalid note data received"):
            await note_service.create_note(user="u1", title="t", text="x")


class TestNoteServiceUpdate:
    """Tests for update_note."""

    @pytest.mark.asyncio
    async def test_update_note_full_replace(self, note_service, users):
        note = await _create(note_service)

        result = await note_service.update_note(
            note_id=note.id, user="u2", title="Buy oat milk", text="1L", completed=True
        )

        assert result.message == "Updated note: Buy oat milk"
        stored = await note_service.notes.find_by_id(note.id)
        assert (stored.user, stored.title, stored.text, stored.completed) == (
            "u2", "Buy oat milk", "1L", True
        )

    @pytest.mark.asyncio
    async def test_update_note_completed_false_is_valid(self, note_service, users):
        note = await _create(note_service)
        result = await note_service.update_note(
            note_id=note.id, user="u1", title="Buy milk", text="2%", completed=False
        )
        assert result.message == "Updated note: Buy milk"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("completed", [None, "true", 1, 0, "false"])
    async def test_update_note_completed_must_be_bool(self, note_service, users, completed):
        note = await _create(note_service)
        with pytest.raises(ValidationError, match="All fields are required"):
            await note_service.update_note(
                note_id=note.id, user="u1", title="Buy milk", text="2%", completed=completed
            )

    @pytest.mark.asyncio
    async def test_update_note_missing_id(self, note_service, users):
        with pytest.raises(ValidationError) as exc_info:
            await note_service.update_note(
                note_id=None, user="u1", title="t", text="x", completed=True
            )
        assert exc_info.value.context["missing"] == ["id"]

    @pytest.mark.asyncio
    async def test_update_note_not_found(self, note_service, users):
        with pytest.raises(NotFoundError, match="Note not found"):
            await note_service.update_note(
                note_id="missing", user="u1", title="t", text="x", completed=True
            )

    @pytest.mark.asyncio
    async def test_update_note_keeps_own_title(self, note_service, users):
        note = await _create(note_service, title="Mine")
        result = await note_service.update_note(
            note_id=note.id, user="u1", title="Mine", text="changed", completed=False
        )
        assert result.message == "Updated note: Mine"

    @pytest.mark.asyncio
    async def test_update_note_rejects_other_notes_title(self, note_service, users):
        await _create(note_service, title="Taken")
        note = await _create(note_service, title="Mine")

        with pytest.raises(ConflictError, match="Duplicate note title"):
            await note_service.update_note(
                note_id=note.id, user="u1", title="Taken", text="x", completed=False
            )

    @pytest.mark.asyncio
    async def test_update_note_does_not_check_user_exists(self, note_service, users):
        """Owner existence is only checked on create."""
        note = await _create(note_service)
        result = await note_service.update_note(
            note_id=note.id, user="nobody", title="Buy milk", text="2%", completed=True
        )
        assert result.message == "Updated note: Buy milk"


class TestNoteServiceDelete:
    """Tests for delete_note."""

    @pytest.mark.asyncio
    async def test_delete_note_success(self, note_service, users, db_session):
        note = await _create(note_service)
        note_id = note.id

        reply = await note_service.delete_note(note_id)

        assert reply == f"Note Buy milk with ID {note_id} deleted"
        remaining = (await db_session.execute(select(Note))).scalars().all()
        assert remaining == []

    @pytest.mark.asyncio
    async def test_delete_note_missing_id(self, note_service):
        with pytest.raises(ValidationError, match="Note ID required"):
            await note_service.delete_note(None)

    @pytest.mark.asyncio
    async def test_delete_note_not_found(self, note_service):
        with pytest.raises(NotFoundError, match="Note not found"):
            await note_service.delete_note("missing")

    @pytest.mark.asyncio
    async def test_delete_then_list_is_empty(self, note_service, users):
        note = await _create(note_service)
        await note_service.delete_note(note.id)

        with pytest.raises(EmptyResultError):
            await note_service.list_notes()

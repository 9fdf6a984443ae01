"""
Notes API — Note Service (Business Logic)
==========================================

What:  The four note operations: list, create, update, delete.
How:   Validates the request fields, runs the existence and duplicate-title
       lookups against the stores, then reads or mutates the notes store.
Who:   Called by the /notes route handlers; calls NoteStore and UserStore.

Validation Order (each step short-circuits):
    create: fields present → user exists → title unused
    update: fields present & completed is bool → note exists → title unused
            by any *other* note
    delete: id present → note exists

Error Handling:
    Failures are raised as typed NotesAPIError subclasses and mapped to
    HTTP responses by the exception handlers in main.py. Store failures
    (SQLAlchemyError) are logged and wrapped in DatabaseError.

    The duplicate-title check and the write are not atomic. Two concurrent
    writers can both pass the check; the unique constraint on notes.title
    then rejects the second write and NoteStore raises the same
    ConflictError the check would have.
"""

import logging
from typing import Any, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from notes_api.exceptions import (
    ConflictError,
    DatabaseError,
    EmptyResultError,
    NotFoundError,
    NotesAPIError,
    ValidationError,
)
from notes_api.schemas.note import MessageResponse, NoteWithUsername
from notes_api.stores import NoteStore, UserStore

logger = logging.getLogger(__name__)

FIELDS_REQUIRED = "All fields are required"


class NoteService:
    """
    Business logic layer for note operations.

    Args:
        notes: Store for the notes table (read/write)
        users: Store for the users table (read-only)
    """

    def __init__(self, notes: NoteStore, users: UserStore):
        self.notes = notes
        self.users = users

    async def list_notes(self) -> List[NoteWithUsername]:
        """
        Return every note with its owner's username attached.

        Usernames are resolved with a single batched lookup over the distinct
        owner ids, then joined in memory. A note whose owner has been removed
        is returned with `username=None`.

        Raises:
            EmptyResultError: There are no notes (→ 400, not an empty array)
            DatabaseError: Query execution failed (→ 500)
        """
        try:
            notes = await self.notes.find_all()
            if not notes:
                raise EmptyResultError(message="No notes found")

            owners = await self.users.find_by_ids({note.user for note in notes})

            result = []
            for note in notes:
                item = NoteWithUsername.model_validate(note)
                owner = owners.get(note.user)
                item.username = owner.username if owner else None
                result.append(item)
            return result

        except NotesAPIError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error listing notes: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve notes. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def create_note(
        self,
        user: Optional[str],
        title: Optional[str],
        text: Optional[str],
    ) -> MessageResponse:
        """
        Create a note for an existing user with an unused title.

        Returns:
            MessageResponse("New note created: <title>"), sent with HTTP 201

        Raises:
            ValidationError: A field is missing/empty, or the insert produced no record
            NotFoundError: The user does not exist
            ConflictError: Another note already has this title
            DatabaseError: Store failure
        """
        if not user or not title or not text:
            raise ValidationError(
                message=FIELDS_REQUIRED,
                context={"missing": _missing(user=user, title=title, text=text)},
            )

        try:
            if await self.users.find_by_id(user) is None:
                raise NotFoundError(resource="user", resource_id=user)

            if await self.notes.find_by_title(title) is not None:
                raise ConflictError(message="Duplicate note title", field="title")

            note = await self.notes.create(user=user, title=title, text=text)

        except NotesAPIError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error creating note '%s': %s", title, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the note. Please try again.",
                context={"title": title, "error_type": type(e).__name__},
            )

        if note is None:
            raise ValidationError(message="Invalid note data received")

        logger.info("Note created: %s (user=%s)", note.id, user)
        return MessageResponse(message=f"New note created: {title}")

    async def update_note(
        self,
        note_id: Optional[str],
        user: Optional[str],
        title: Optional[str],
        text: Optional[str],
        completed: Any,
    ) -> MessageResponse:
        """
        Overwrite user, title, text and completed on an existing note.

        This is a full replace: every mutable field is required and written,
        whether or not it changed. `completed` must be a real boolean; False
        is accepted.

        Raises:
            ValidationError: A field is missing/empty or completed is not a bool
            NotFoundError: No note has this id
            ConflictError: A different note already has this title
            DatabaseError: Store failure
        """
        if not note_id or not user or not title or not text or not isinstance(completed, bool):
            missing = _missing(id=note_id, user=user, title=title, text=text)
            if not isinstance(completed, bool):
                missing.append("completed")
            raise ValidationError(message=FIELDS_REQUIRED, context={"missing": missing})

        try:
            note = await self.notes.find_by_id(note_id)
            if note is None:
                raise NotFoundError(resource="note", resource_id=note_id)

            duplicate = await self.notes.find_by_title(title)
            # A note may keep its own title
            if duplicate is not None and duplicate.id != note_id:
                raise ConflictError(message="Duplicate note title", field="title")

            note.user = user
            note.title = title
            note.text = text
            note.completed = completed

            updated = await self.notes.save(note)

        except NotesAPIError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error updating note %s: %s", note_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the note. Please try again.",
                context={"note_id": note_id, "error_type": type(e).__name__},
            )

        logger.info("Note updated: %s (completed=%s)", note_id, completed)
        return MessageResponse(message=f"Updated note: {updated.title}")

    async def delete_note(self, note_id: Optional[str]) -> str:
        """
        Permanently remove a note.

        Returns:
            "Note <title> with ID <id> deleted"; title and id are captured
            before the delete so the message does not depend on what the
            store hands back afterwards.

        Raises:
            ValidationError: No id given
            NotFoundError: No note has this id
            DatabaseError: Store failure
        """
        if not note_id:
            raise ValidationError(message="Note ID required", field="id")

        try:
            note = await self.notes.find_by_id(note_id)
            if note is None:
                raise NotFoundError(resource="note", resource_id=note_id)

            title, deleted_id = note.title, note.id
            await self.notes.delete(note)

        except NotesAPIError:
            raise
        except SQLAlchemyError as e:
            logger.error("Database error deleting note %s: %s", note_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the note. Please try again.",
                context={"note_id": note_id, "error_type": type(e).__name__},
            )

        logger.info("Note deleted: %s", deleted_id)
        return f"Note {title} with ID {deleted_id} deleted"


def _missing(**fields: Any) -> List[str]:
    return [name for name, value in fields.items() if not value]

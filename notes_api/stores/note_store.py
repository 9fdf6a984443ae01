"""
Notes API — Note Store
=======================

What:  Document-style CRUD over the `notes` table.
Who:   Used by NoteService; constructed per request around its session.

Writes are flushed immediately (commit happens in get_db_session) so that
constraint violations surface inside the service call rather than at
commit time after the handler has returned.
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from notes_api.exceptions import ConflictError
from notes_api.models.note import Note, TITLE_CONSTRAINT

logger = logging.getLogger(__name__)


def _is_title_violation(exc: IntegrityError) -> bool:
    # PostgreSQL names the constraint; SQLite names the column
    detail = str(exc.orig)
    return TITLE_CONSTRAINT in detail or "notes.title" in detail


class NoteStore:
    """Persistence operations for notes."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_all(self) -> List[Note]:
        """All notes, in the order the database returns them."""
        result = await self.session.execute(select(Note))
        return list(result.scalars().all())

    async def find_by_id(self, note_id: str) -> Optional[Note]:
        return await self.session.get(Note, note_id)

    async def find_by_title(self, title: str) -> Optional[Note]:
        """Exact, case-sensitive title match."""
        result = await self.session.execute(
            select(Note).where(Note.title == title).limit(1)
        )
        return result.scalars().first()

    async def create(self, user: str, title: str, text: str) -> Note:
        """Insert a new note. `completed` takes the model default (False)."""
        note = Note(user=user, title=title, text=text, completed=False)
        self.session.add(note)
        await self._flush(title)
        return note

    async def save(self, note: Note) -> Note:
        """Persist in-place changes to a loaded note."""
        self.session.add(note)
        await self._flush(note.title)
        return note

    async def delete(self, note: Note) -> None:
        await self.session.delete(note)
        await self.session.flush()

    async def _flush(self, title: str) -> None:
        try:
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            if _is_title_violation(e):
                # Another writer claimed the title between our check and write
                logger.warning("Unique title constraint hit for '%s'", title)
                raise ConflictError(
                    message="Duplicate note title",
                    field="title",
                    context={"title": title},
                )
            raise

"""
Notes API — Note SQLAlchemy Model
==================================

What:  ORM model representing the `notes` table.
Who:   Used by NoteStore for CRUD operations and by Alembic for schema management.

Table Design:
    - id: UUID4 text assigned on insert (string keys also cover externally
      assigned ids such as those imported from a document store)
    - user_id: owning user's id. Indexed, but deliberately not a FOREIGN KEY:
      the owner is checked by a lookup when the note is created, and a note
      may outlive its user (it is then listed without a username).
    - title: unique across all notes. The service checks for duplicates
      before writing; the unique index catches writers that race the check.
    - completed: defaults to false on insert
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, String, Text, UniqueConstraint, false
from sqlalchemy.orm import Mapped, mapped_column

from notes_api.database import Base

TITLE_CONSTRAINT = "uq_notes_title"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Note(Base):
    """
    A task/note owned by a user.

    Lifecycle:
        1. Created by NoteService.create_note after the owner and title checks
        2. Overwritten in place (user, title, text, completed) by update_note
        3. Removed permanently by delete_note (no soft delete)
    """

    __tablename__ = "notes"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )

    # Column is `user_id` because `user` is a reserved word in PostgreSQL
    user: Mapped[str] = mapped_column(
        "user_id",
        String(36),
        nullable=False,
        index=True,
        comment="Owning user id (checked at write time, no FK constraint)",
    )

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Note title, unique across all notes",
    )

    text: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    completed: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )

    # Named so that NoteStore can recognise a violation in the driver message
    __table_args__ = (
        UniqueConstraint("title", name=TITLE_CONSTRAINT),
    )

    def __repr__(self) -> str:
        return (
            f"<Note(id={self.id}, title='{self.title}', "
            f"user='{self.user}', completed={self.completed})>"
        )

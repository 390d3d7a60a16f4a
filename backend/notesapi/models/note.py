"""
Notes API — Note SQLAlchemy Model
===================================

What:  ORM model representing the `notes` table.
Why:   Storage shape of the Note entity. The wire shapes live in
       notesapi.schemas.note so clients can never write server-derived columns.
Who:   Used by NoteRepository for CRUD operations and by Alembic for migrations.

Table Design:
    - Integer identity primary key, assigned by the database on insert
    - title / text: TEXT NOT NULL, no artificial length limit
    - created_at / updated_at: UTC with timezone; created_at <= updated_at
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from notesapi.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Attach UTC to naive datetimes.

    SQLite hands back naive values even for timezone-aware columns; every
    timestamp we store is UTC, so this is lossless.
    """
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class Note(Base):
    """
    A titled text record with creation and modification timestamps.

    Lifecycle:
        1. Inserted by NoteService.create_note (both timestamps equal)
        2. title/text replaced by NoteService.update_note (updated_at restamped)
        3. Hard-deleted by NoteService.delete_note
    """

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Identity assigned by the database",
    )

    title: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Note title (non-empty)",
    )

    text: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Note body (non-empty)",
    )

    # ── Timestamps ────────────────────────────────────────────────────────
    # Stored in UTC; conversion to local time happens in the client
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        comment="When this note was created (UTC), never modified",
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        comment="When this note was last modified (UTC)",
    )

    # Ids are never reused, even after the newest row is deleted
    __table_args__ = {"sqlite_autoincrement": True}

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r}, updated_at='{self.updated_at}')>"

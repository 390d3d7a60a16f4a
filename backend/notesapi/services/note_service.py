"""
Notes API — Note Service (CRUD Orchestrator)
==============================================

What:  The five note operations: create, get, list, update, delete.
Why:   Encapsulates the business rules (validation, timestamp stamping,
       not-found detection) independent of HTTP concerns.
How:   Each call builds a NoteRepository over the session it is given,
       runs a single store operation and returns response schemas.
Who:   Called by route handlers; calls the repository.

Transactions:
    Writes commit inside the same try block that wraps SQLAlchemy errors,
    so a failed commit becomes a StorageError before any response is sent.

Error Handling Strategy:
    Each method surfaces three distinct outcomes to the caller:
    - ValidationError: title/text missing or blank
    - NotFoundError:   no note with the requested id
    - StorageError:    SQLAlchemy failed (wrapped; original logged, not retried)

Design Decision:
    NoteService is stateless; it receives the db session for each call, so
    one instance is shared by all requests with no locking.
"""

import logging
from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from notesapi.exceptions import NotFoundError, StorageError, ValidationError
from notesapi.models.note import as_utc, utcnow
from notesapi.repositories.note_repository import NoteRepository
from notesapi.schemas.note import NoteResponse

logger = logging.getLogger(__name__)


def _validate_fields(title: Optional[str], text: Optional[str]) -> None:
    for field, value in (("title", title), ("text", text)):
        if value is None or not value.strip():
            raise ValidationError(message=f"{field} must not be empty", field=field)


def _next_timestamp(previous: datetime) -> datetime:
    """Current UTC time, forced strictly past `previous` if the clock has not moved."""
    now = utcnow()
    previous = as_utc(previous)
    if now <= previous:
        now = previous + timedelta(microseconds=1)
    return now


class NoteService:
    """
    Business logic layer for note operations.

    Responsibilities:
        - create_note(): validate, stamp both timestamps, insert
        - get_note() / list_notes(): reads with not-found handling
        - update_note(): validate, replace title/text, restamp updated_at
        - delete_note(): hard delete
    """

    async def create_note(
        self, db: AsyncSession, title: Optional[str], text: Optional[str]
    ) -> NoteResponse:
        """
        Insert a new note.

        created_at and updated_at are stamped with the same instant, so a
        freshly created note always has createdAt == updatedAt.

        Raises:
            ValidationError: title or text missing/blank (→ 400)
            StorageError: insert failed (→ 500)
        """
        _validate_fields(title, text)
        try:
            note = await NoteRepository(db).insert(title=title, text=text, now=utcnow())
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error creating note: %s", str(e), exc_info=True)
            raise StorageError(
                message="Could not create the note. Please try again.",
                context={"operation": "create", "error_type": type(e).__name__},
            ) from e

        logger.info("Note %d created", note.id)
        return NoteResponse.model_validate(note)

    async def get_note(self, db: AsyncSession, note_id: int) -> NoteResponse:
        """
        Retrieve a single note by ID.

        Raises:
            NotFoundError: Note with given ID does not exist (→ 404)
            StorageError: Query execution failed (→ 500)
        """
        try:
            note = await NoteRepository(db).get(note_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching note %s: %s", note_id, str(e))
            raise StorageError(
                message="Could not retrieve the note. Please try again.",
                context={"operation": "get", "note_id": note_id},
            ) from e

        if note is None:
            raise NotFoundError(resource="note", resource_id=note_id)
        return NoteResponse.model_validate(note)

    async def list_notes(self, db: AsyncSession) -> List[NoteResponse]:
        """Return every note in insertion order."""
        try:
            notes = await NoteRepository(db).list_all()
        except SQLAlchemyError as e:
            logger.error("Database error listing notes: %s", str(e), exc_info=True)
            raise StorageError(
                message="Could not retrieve notes. Please try again.",
                context={"operation": "list", "error_type": type(e).__name__},
            ) from e
        return [NoteResponse.model_validate(note) for note in notes]

    async def update_note(
        self,
        db: AsyncSession,
        note_id: int,
        title: Optional[str],
        text: Optional[str],
    ) -> NoteResponse:
        """
        Replace title and text of an existing note.

        id and created_at are untouched; updated_at moves strictly forward.
        Concurrent updates to the same note are last-write-wins.

        Raises:
            ValidationError: title or text missing/blank (→ 400)
            NotFoundError: no such note (→ 404)
            StorageError: query, flush or commit failed (→ 500)
        """
        _validate_fields(title, text)
        repository = NoteRepository(db)
        try:
            existing = await repository.get(note_id)
            if existing is None:
                raise NotFoundError(resource="note", resource_id=note_id)
            note = await repository.update(
                note_id,
                title=title,
                text=text,
                now=_next_timestamp(existing.updated_at),
            )
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error updating note %s: %s", note_id, str(e))
            raise StorageError(
                message="Could not update the note. Please try again.",
                context={"operation": "update", "note_id": note_id},
            ) from e

        logger.info("Note %d updated", note_id)
        return NoteResponse.model_validate(note)

    async def delete_note(self, db: AsyncSession, note_id: int) -> None:
        """
        Hard-delete a note.

        Deleting an id that is already gone raises NotFoundError again.
        """
        try:
            deleted = await NoteRepository(db).delete(note_id)
            if deleted:
                await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error deleting note %s: %s", note_id, str(e))
            raise StorageError(
                message="Could not delete the note. Please try again.",
                context={"operation": "delete", "note_id": note_id},
            ) from e

        if not deleted:
            raise NotFoundError(resource="note", resource_id=note_id)
        logger.info("Note %d deleted", note_id)


# ── Singleton Instance ────────────────────────────────────────────────────
note_service = NoteService()

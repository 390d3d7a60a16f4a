"""
Notes API — Note Repository (Persistence Store)
=================================================

What:  The only code that reads or writes the `notes` table.
Why:   Keeps SQL out of the service layer and makes the store swappable.
How:   Bound to one AsyncSession for one unit of work. Writes are flushed,
       not committed; the service commits once the whole write succeeded.

Missing rows are reported as None / False; translating them into
NotFoundError is the service's job. SQLAlchemy errors propagate unchanged.
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from notesapi.models.note import Note

# Ids are 32-bit identities; anything outside cannot name a stored note
MIN_NOTE_ID = 1
MAX_NOTE_ID = 2**31 - 1


class NoteRepository:
    """CRUD access to Note rows through an explicitly passed session."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def insert(self, title: str, text: str, now: datetime) -> Note:
        """Persist a new note; the flush makes the database assign its id."""
        note = Note(title=title, text=text, created_at=now, updated_at=now)
        self.session.add(note)
        await self.session.flush()
        return note

    async def get(self, note_id: int) -> Optional[Note]:
        if not MIN_NOTE_ID <= note_id <= MAX_NOTE_ID:
            return None
        return await self.session.get(Note, note_id)

    async def list_all(self) -> List[Note]:
        # Identity order == insertion order
        result = await self.session.execute(select(Note).order_by(Note.id))
        return list(result.scalars().all())

    async def update(
        self, note_id: int, title: str, text: str, now: datetime
    ) -> Optional[Note]:
        note = await self.get(note_id)
        if note is None:
            return None
        note.title = title
        note.text = text
        note.updated_at = now
        await self.session.flush()
        return note

    async def delete(self, note_id: int) -> bool:
        note = await self.get(note_id)
        if note is None:
            return False
        await self.session.delete(note)
        await self.session.flush()
        return True

"""ORM models; importing this package registers every table on Base.metadata."""

from notesapi.models.note import Note

__all__ = ["Note"]

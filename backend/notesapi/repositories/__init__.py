# Repositories package init
"""
Notes API — Persistence Layer
===============================

What:  Table-level data access, one repository per table.
Who:   Instantiated by services with the request's AsyncSession.
"""

from notesapi.repositories.note_repository import NoteRepository

__all__ = ["NoteRepository"]

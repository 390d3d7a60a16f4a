"""
Notes API — Application Package
=================================

Layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← validation, timestamps, errors
    ├─────────────────────────────────────┤
    │        Repositories (Store)         │  ← SQL against the notes table
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

notesapi.client is the async SDK that consumes the HTTP layer.
"""

__version__ = "1.0.0"

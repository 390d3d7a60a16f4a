"""
Notes API — Pydantic Request/Response Schemas
===============================================

What:  Pydantic models defining the API contract between the web client and backend.
Why:   Strict input validation, automatic serialization, and OpenAPI doc generation.
How:   FastAPI uses these models to validate request bodies, serialize responses,
       and generate Swagger/OpenAPI documentation automatically.

Design Decision:
    Input and output shapes are separate from the SQLAlchemy model and from each other:
    1. NoteCreate / NoteUpdate carry only title and text. Unknown keys (id,
       createdAt, updatedAt sent by a client echoing a whole note) are dropped,
       so server-derived fields can never be written by a client.
    2. NoteResponse is what the API returns, with camelCase keys on the wire.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from notesapi.models.note import as_utc


def _require_text(value: str, field: str) -> str:
    if not value.strip():
        raise ValueError(f"{field} must not be empty")
    return value


# ══════════════════════════════════════════════════════════════════════════
# Request Models — What the client sends
# ══════════════════════════════════════════════════════════════════════════


class NoteInput(BaseModel):
    """Mutable fields of a note. Both are required and must not be blank."""

    title: str = Field(min_length=1, description="Note title")
    text: str = Field(min_length=1, description="Note body")

    model_config = ConfigDict(extra="ignore")

    @field_validator("title", "text")
    @classmethod
    def validate_not_blank(cls, v: str, info: ValidationInfo) -> str:
        return _require_text(v, info.field_name)


class NoteCreate(NoteInput):
    """Body of POST /notes."""


class NoteUpdate(NoteInput):
    """Body of PUT /notes/{id}. Replaces both title and text."""


# ══════════════════════════════════════════════════════════════════════════
# Response Models — What the API returns to clients
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """
    Full representation of a note.

    Example:
        {"id": 1, "title": "A", "text": "B",
         "createdAt": "2024-01-15T12:00:00Z", "updatedAt": "2024-01-15T12:00:00Z"}
    """

    id: int = Field(description="Unique note identifier")
    title: str = Field(description="Note title")
    text: str = Field(description="Note body")
    created_at: datetime = Field(description="When the note was created (UTC ISO 8601)")
    updated_at: datetime = Field(description="When the note was last modified (UTC ISO 8601)")

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @field_validator("created_at", "updated_at")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        return as_utc(v)


# ══════════════════════════════════════════════════════════════════════════
# Error / Status Response Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Fields:
        error: Machine-readable error code (validation_error, not_found, server_error)
        message: Human-readable description
        details: Optional extra context (e.g., which field failed validation)
        request_id: Correlation ID for tracing this error in server logs
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class MessageResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")

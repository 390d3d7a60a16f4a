"""
Notes API — Notes Route Handlers
==================================

What:  The five CRUD endpoints under /notes.
How:   Validates path and body, delegates to NoteService, sets status codes
       and headers. Errors raised by the service are turned into JSON
       responses by the global handlers in main.py.

Route Table:
    GET    /notes        → 200 + JSON array
    GET    /notes/{id}   → 200 + JSON object | 404
    POST   /notes        → 201 + JSON object + Location | 400
    PUT    /notes/{id}   → 204 | 404 | 400
    DELETE /notes/{id}   → 204 | 404

{id} uses Starlette's int convertor, so a non-numeric id is an unknown
route (404) rather than a validation failure.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from notesapi.database import get_db_session
from notesapi.schemas.note import (
    ErrorResponse,
    NoteCreate,
    NoteResponse,
    NoteUpdate,
)
from notesapi.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notes", tags=["Notes"])


@router.get(
    "",
    response_model=List[NoteResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List all notes",
)
async def list_notes(
    db: AsyncSession = Depends(get_db_session),
) -> List[NoteResponse]:
    return await note_service.list_notes(db=db)


@router.get(
    "/{note_id:int}",
    response_model=NoteResponse,
    responses={
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a single note by ID",
)
async def get_note(
    note_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await note_service.get_note(db=db, note_id=note_id)


@router.post(
    "",
    response_model=NoteResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Missing or empty title/text", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a note",
    description=(
        "Creates a note from title and text. The server assigns the id and both "
        "timestamps; any id/createdAt/updatedAt in the body is ignored."
    ),
)
async def create_note(
    payload: NoteCreate,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    note = await note_service.create_note(db=db, title=payload.title, text=payload.text)
    response.headers["Location"] = f"{router.prefix}/{note.id}"
    return note


@router.put(
    "/{note_id:int}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        400: {"description": "Missing or empty title/text", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Replace a note's title and text",
)
async def update_note(
    note_id: int,
    payload: NoteUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await note_service.update_note(
        db=db, note_id=note_id, title=payload.title, text=payload.text
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{note_id:int}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Delete a note",
)
async def delete_note(
    note_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await note_service.delete_note(db=db, note_id=note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

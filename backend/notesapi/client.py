"""
Notes API — Async Client SDK
==============================

What:  Typed async wrapper around the /notes routes, one method per route.
Why:   Gives UI layers and scripts a single, typed way to call the API.
How:   httpx.AsyncClient; every response is checked with raise_for_status.
       Any transport or HTTP error is logged and re-raised unchanged.
       No retries, no caching, no batching.

Example:
    async with NotesClient("http://localhost:8000") as client:
        note = await client.create_note("Groceries", "Milk, eggs")
        await client.update_note(note.id, "Groceries", "Milk, eggs, bread")
        notes = await client.get_all_notes()
"""

import logging
from typing import Any, List, Optional

import httpx

from notesapi.schemas.note import NoteResponse

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000"


class NotesClient:
    """
    Async client for the Notes API.

    Args:
        base_url: Server root, e.g. "http://localhost:8000".
        http_client: Optional pre-configured httpx.AsyncClient (custom
            transport, timeouts, ...). When given, base_url is ignored and
            the caller keeps ownership of it.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            base_url=base_url,
            headers={"Content-Type": "application/json"},
        )

    async def __aenter__(self) -> "NotesClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _request(self, method: str, url: str, action: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("Error %s: %s", action, e)
            raise
        return response

    async def get_all_notes(self) -> List[NoteResponse]:
        response = await self._request("GET", "/notes", "fetching notes")
        return [NoteResponse.model_validate(item) for item in response.json()]

    async def get_note(self, note_id: int) -> NoteResponse:
        response = await self._request("GET", f"/notes/{note_id}", f"fetching note {note_id}")
        return NoteResponse.model_validate(response.json())

    async def create_note(self, title: str, text: str) -> NoteResponse:
        response = await self._request(
            "POST", "/notes", "creating note", json={"title": title, "text": text}
        )
        return NoteResponse.model_validate(response.json())

    async def update_note(self, note_id: int, title: str, text: str) -> None:
        """Replace title and text. The server answers 204, so nothing is returned."""
        await self._request(
            "PUT",
            f"/notes/{note_id}",
            f"updating note {note_id}",
            json={"title": title, "text": text},
        )

    async def delete_note(self, note_id: int) -> None:
        await self._request("DELETE", f"/notes/{note_id}", f"deleting note {note_id}")

"""
Notes API — HTTP Endpoint Tests
=================================

What:  The route table, status codes, headers and error bodies of /notes.
How:   HTTPX AsyncClient over ASGITransport against an app bound to a
       SQLite database in tmp_path. No server process is started.
"""

from datetime import datetime
from unittest.mock import AsyncMock, patch

import httpx
import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from notesapi.exceptions import StorageError

OUT_OF_RANGE_ID = 99999999999999999999


async def _create(client, title="A", text="B"):
    response = await client.post("/notes", json={"title": title, "text": text})
    assert response.status_code == 201
    return response.json()


def _db_failure():
    return OperationalError("COMMIT", {}, Exception("disk I/O error"))


class TestNotesLifecycle:

    @pytest.mark.asyncio
    async def test_create_update_delete_roundtrip(self, test_client):
        response = await test_client.post("/notes", json={"title": "A", "text": "B"})

        assert response.status_code == 201
        created = response.json()
        assert set(created) == {"id", "title", "text", "createdAt", "updatedAt"}
        assert created["id"] >= 1
        assert created["title"] == "A"
        assert created["text"] == "B"
        assert created["createdAt"] == created["updatedAt"]
        assert response.headers["Location"] == f"/notes/{created['id']}"

        note_url = f"/notes/{created['id']}"
        response = await test_client.put(note_url, json={"title": "C", "text": "D"})
        assert response.status_code == 204
        assert response.content == b""

        response = await test_client.get(note_url)
        assert response.status_code == 200
        fetched = response.json()
        assert fetched["id"] == created["id"]
        assert (fetched["title"], fetched["text"]) == ("C", "D")
        assert fetched["createdAt"] == created["createdAt"]
        assert datetime.fromisoformat(fetched["updatedAt"]) > datetime.fromisoformat(
            created["updatedAt"]
        )

        response = await test_client.delete(note_url)
        assert response.status_code == 204

        response = await test_client.get(note_url)
        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_list_notes(self, test_client):
        assert (await test_client.get("/notes")).json() == []

        ids = [(await _create(test_client, f"T{i}", f"X{i}"))["id"] for i in range(3)]

        response = await test_client.get("/notes")
        assert response.status_code == 200
        body = response.json()
        assert [note["id"] for note in body] == ids
        for note_id in ids:
            assert (await test_client.get(f"/notes/{note_id}")).status_code == 200

    @pytest.mark.asyncio
    async def test_timestamps_are_utc(self, test_client):
        created = await _create(test_client)

        created_at = datetime.fromisoformat(created["createdAt"].replace("Z", "+00:00"))
        assert created_at.utcoffset().total_seconds() == 0

    @pytest.mark.asyncio
    async def test_server_derived_fields_ignored_on_create(self, test_client):
        response = await test_client.post(
            "/notes",
            json={
                "id": 999,
                "title": "A",
                "text": "B",
                "createdAt": "2000-01-01T00:00:00Z",
                "updatedAt": "2000-01-01T00:00:00Z",
            },
        )

        assert response.status_code == 201
        body = response.json()
        assert body["id"] != 999
        assert not body["createdAt"].startswith("2000")

    @pytest.mark.asyncio
    async def test_update_ignores_client_timestamps(self, test_client):
        created = await _create(test_client)

        await test_client.put(
            f"/notes/{created['id']}",
            json={"id": 5, "title": "C", "text": "D", "createdAt": "2000-01-01T00:00:00Z"},
        )

        fetched = (await test_client.get(f"/notes/{created['id']}")).json()
        assert fetched["createdAt"] == created["createdAt"]
        assert fetched["id"] == created["id"]


class TestNotesErrors:

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"text": "B"},
            {"title": "A"},
            {"title": "", "text": "B"},
            {"title": "A", "text": "   "},
            {},
        ],
    )
    async def test_create_bad_input(self, test_client, payload):
        response = await test_client.post("/notes", json=payload)

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"
        assert (await test_client.get("/notes")).json() == []

    @pytest.mark.asyncio
    async def test_malformed_json(self, test_client):
        response = await test_client.post(
            "/notes",
            content=b'{"title": "A", "text": ',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Request body is not valid JSON"

    @pytest.mark.asyncio
    async def test_update_bad_input(self, test_client):
        created = await _create(test_client)

        response = await test_client.put(f"/notes/{created['id']}", json={"title": "C"})

        assert response.status_code == 400
        fetched = (await test_client.get(f"/notes/{created['id']}")).json()
        assert fetched["title"] == "A"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["GET", "DELETE"])
    async def test_unknown_id(self, test_client, method):
        response = await test_client.request(method, "/notes/4242")

        assert response.status_code == 404
        assert "4242" in response.json()["message"]

    @pytest.mark.asyncio
    async def test_update_unknown_id(self, test_client):
        response = await test_client.put("/notes/4242", json={"title": "C", "text": "D"})

        assert response.status_code == 404

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["GET", "PUT", "DELETE"])
    async def test_out_of_range_id(self, test_client, method):
        response = await test_client.request(
            method, f"/notes/{OUT_OF_RANGE_ID}", json={"title": "C", "text": "D"}
        )

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_delete_twice(self, test_client):
        created = await _create(test_client)

        assert (await test_client.delete(f"/notes/{created['id']}")).status_code == 204
        assert (await test_client.delete(f"/notes/{created['id']}")).status_code == 404

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/notes/abc", "/notes/1/extra", "/nothing-here"])
    async def test_unrecognized_routes(self, test_client, path):
        response = await test_client.get(path)

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_storage_error_is_opaque(self, test_client):
        failure = StorageError(context={"operation": "list", "secret": "dsn"})
        with patch(
            "notesapi.routes.notes.note_service.list_notes",
            AsyncMock(side_effect=failure),
        ):
            response = await test_client.get("/notes")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "server_error"
        assert "details" not in body
        assert "dsn" not in response.text


class TestStorageFailures:
    """Real SQLAlchemy failures travelling through service, dependency and handlers."""

    @pytest.mark.asyncio
    async def test_failed_commit_on_create(self, test_client):
        with patch.object(AsyncSession, "commit", AsyncMock(side_effect=_db_failure())):
            response = await test_client.post("/notes", json={"title": "A", "text": "B"})

        assert response.status_code == 500
        assert response.json()["error"] == "server_error"
        assert "disk I/O" not in response.text
        assert (await test_client.get("/notes")).json() == []

    @pytest.mark.asyncio
    async def test_failed_commit_on_update(self, test_client):
        created = await _create(test_client)

        with patch.object(AsyncSession, "commit", AsyncMock(side_effect=_db_failure())):
            response = await test_client.put(
                f"/notes/{created['id']}", json={"title": "C", "text": "D"}
            )

        assert response.status_code == 500
        assert response.json()["error"] == "server_error"
        fetched = (await test_client.get(f"/notes/{created['id']}")).json()
        assert fetched == created

    @pytest.mark.asyncio
    async def test_failed_commit_on_delete(self, test_client):
        created = await _create(test_client)

        with patch.object(AsyncSession, "commit", AsyncMock(side_effect=_db_failure())):
            response = await test_client.delete(f"/notes/{created['id']}")

        assert response.status_code == 500
        assert (await test_client.get(f"/notes/{created['id']}")).status_code == 200

    @pytest.mark.asyncio
    async def test_failed_flush_on_create(self, test_client):
        with patch.object(AsyncSession, "flush", AsyncMock(side_effect=_db_failure())):
            response = await test_client.post("/notes", json={"title": "A", "text": "B"})

        assert response.status_code == 500
        assert response.json()["error"] == "server_error"
        assert (await test_client.get("/notes")).json() == []


class TestCrossCutting:

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, test_client):
        response = await test_client.get("/notes", headers={"X-Request-ID": "abc123"})

        assert response.headers["X-Request-ID"] == "abc123"

    @pytest.mark.asyncio
    async def test_request_id_generated_and_in_error_body(self, test_client):
        response = await test_client.get("/notes/777")

        rid = response.headers["X-Request-ID"]
        assert rid
        assert response.json()["request_id"] == rid

    @pytest.mark.asyncio
    async def test_cors_allows_configured_origin(self, test_settings, test_client):
        origin = test_settings.cors_origin
        response = await test_client.options(
            "/notes",
            headers={"Origin": origin, "Access-Control-Request-Method": "POST"},
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == origin

    @pytest.mark.asyncio
    async def test_cors_rejects_other_origins(self, test_client):
        response = await test_client.get("/notes", headers={"Origin": "http://evil.example"})

        assert response.status_code == 200
        assert "access-control-allow-origin" not in response.headers

    @pytest.mark.asyncio
    async def test_root(self, test_client):
        response = await test_client.get("/")

        assert response.status_code == 200
        assert response.json() == {"message": "Notes API is running"}

    @pytest.mark.asyncio
    async def test_health_healthy(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        assert response.json()["database"] == "connected"

    @pytest.mark.asyncio
    async def test_health_unhealthy(self, app, test_client):
        with patch.object(
            app.state.database, "ping", AsyncMock(side_effect=ConnectionError("down"))
        ):
            response = await test_client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"

    @pytest.mark.asyncio
    async def test_unexpected_error_keeps_request_id(self, app):
        transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
        failure = AsyncMock(side_effect=RuntimeError("boom"))
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            with patch("notesapi.routes.notes.note_service.list_notes", failure):
                response = await client.get("/notes", headers={"X-Request-ID": "rid-500"})

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "internal_server_error"
        assert body["request_id"] == "rid-500"
        assert response.headers["X-Request-ID"] == "rid-500"
        assert "boom" not in response.text

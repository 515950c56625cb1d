"""Endpoint tests for /api/progress."""

from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from handbook.auth.security import create_access_token
from handbook.database.session import get_db_session
from handbook.progress.models import ProgressRecord


pytestmark = pytest.mark.usefixtures("seeded_catalogs")


def _statuses(body: dict) -> list[tuple[int, str]]:
    return [(item["item_id"], item["status"]) for item in body["data"]]


async def _set(client: AsyncClient, user_id: str, item_id: int, status: str, **extra) -> None:
    resp = await client.put(
        "/api/progress/update", json={"user_id": user_id, "item_id": item_id, "status": status, **extra}
    )
    assert resp.status_code == 200, resp.text


async def test_view_for_user_without_records(client: AsyncClient) -> None:
    resp = await client.get("/api/progress/u1")

    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "success"
    assert _statuses(body) == [(1, "NOT_STARTED"), (2, "NOT_STARTED")]
    assert body["data"][0]["title"] == "Vars"


async def test_update_then_view(client: AsyncClient) -> None:
    await _set(client, "u1", 2, "COMPLETED")

    resp = await client.get("/api/progress/u1")

    assert _statuses(resp.json()) == [(1, "NOT_STARTED"), (2, "COMPLETED")]


async def test_update_response_envelope(client: AsyncClient) -> None:
    resp = await client.put("/api/progress/update", json={"user_id": "u1", "item_id": 1, "status": "IN_PROGRESS"})

    assert resp.json() == {
        "status": "success",
        "data": None,
        "message": "Progress updated successfully",
        "error": None,
    }


async def test_update_for_item_outside_catalog(client: AsyncClient) -> None:
    await _set(client, "u1", 99, "COMPLETED")

    resp = await client.get("/api/progress/u1")

    assert [item["item_id"] for item in resp.json()["data"]] == [1, 2]


async def test_update_with_missing_parameters(client: AsyncClient) -> None:
    resp = await client.put("/api/progress/update", json={"user_id": "u1"})

    assert resp.status_code == 400
    body = resp.json()
    assert body["status"] == "error"
    assert "item_id" in body["message"]
    assert "status" in body["message"]


async def test_update_with_unknown_status(client: AsyncClient) -> None:
    resp = await client.put("/api/progress/update", json={"user_id": "u1", "item_id": 1, "status": "DONE"})

    assert resp.status_code == 400
    assert resp.json()["status"] == "error"


async def test_update_with_legacy_status_is_rejected(client: AsyncClient) -> None:
    resp = await client.put("/api/progress/update", json={"user_id": "u1", "item_id": 1, "status": "PENDING"})

    assert resp.status_code == 400
    view = await client.get("/api/progress/u1")
    assert _statuses(view.json())[0] == (1, "NOT_STARTED")


async def test_update_with_malformed_item_id(client: AsyncClient) -> None:
    resp = await client.put("/api/progress/update", json={"user_id": "u1", "item_id": "one", "status": "COMPLETED"})

    assert resp.status_code == 422
    assert resp.json()["message"] == "Invalid input data"


async def test_reset_returns_view_to_defaults(client: AsyncClient) -> None:
    await _set(client, "u1", 1, "COMPLETED")
    await _set(client, "u1", 1, "COMPLETED", scope="snippet")

    resp = await client.delete("/api/progress/reset/u1")

    assert resp.status_code == 200
    assert resp.json()["data"] == {"deleted": 2}
    view = await client.get("/api/progress/u1")
    assert _statuses(view.json()) == [(1, "NOT_STARTED"), (2, "NOT_STARTED")]


async def test_reset_single_scope(client: AsyncClient) -> None:
    await _set(client, "u1", 1, "COMPLETED")
    await _set(client, "u1", 11, "COMPLETED", scope="snippet")

    resp = await client.delete("/api/progress/reset/u1", params={"scope": "snippet"})

    assert resp.json()["data"] == {"deleted": 1}
    view = await client.get("/api/progress/u1")
    assert _statuses(view.json())[0] == (1, "COMPLETED")


async def test_reset_without_records_is_success(client: AsyncClient) -> None:
    resp = await client.delete("/api/progress/reset/nobody")

    assert resp.status_code == 200
    assert resp.json()["status"] == "success"


async def test_reset_without_user_is_bad_request(client: AsyncClient) -> None:
    resp = await client.delete("/api/progress/reset")

    assert resp.status_code == 400
    assert resp.json()["status"] == "error"


async def test_anonymous_view(client: AsyncClient, db_session: AsyncSession) -> None:
    db_session.add(ProgressRecord(user_id="u1", scope="library", item_id="1", status="COMPLETED"))
    await db_session.commit()

    resp = await client.get("/api/progress")

    assert resp.status_code == 200
    assert _statuses(resp.json()) == [(1, "NOT_STARTED"), (2, "NOT_STARTED")]


async def test_snippet_scope_view(client: AsyncClient) -> None:
    await _set(client, "u1", 10, "IN_PROGRESS", scope="snippet")

    resp = await client.get("/api/progress/u1", params={"scope": "snippet"})

    assert _statuses(resp.json()) == [(11, "NOT_STARTED"), (10, "IN_PROGRESS"), (12, "NOT_STARTED")]


async def test_unknown_scope_is_rejected(client: AsyncClient) -> None:
    resp = await client.get("/api/progress/u1", params={"scope": "videos"})

    assert resp.status_code == 422


async def test_corrupted_record_fails_the_view(client: AsyncClient, db_session: AsyncSession) -> None:
    db_session.add(ProgressRecord(user_id="u1", scope="library", item_id="not-a-number", status="COMPLETED"))
    await db_session.commit()

    resp = await client.get("/api/progress/u1")

    assert resp.status_code == 500
    body = resp.json()
    assert body["status"] == "error"
    assert "not-a-number" in body["error"]


async def test_overall_progress(client: AsyncClient) -> None:
    await _set(client, "u1", 1, "COMPLETED")
    await _set(client, "u1", 2, "IN_PROGRESS")
    await _set(client, "u1", 99, "COMPLETED")

    resp = await client.get("/api/progress/overall/u1")

    assert resp.status_code == 200
    assert resp.json()["data"] == {"completed": 1, "in_progress": 1, "total": 2, "overall_progress": "50.00%"}


async def test_overall_progress_per_scope(client: AsyncClient) -> None:
    await _set(client, "u1", 11, "COMPLETED", scope="snippet")

    resp = await client.get("/api/progress/overall/u1", params={"scope": "snippet"})

    assert resp.json()["data"]["overall_progress"] == "33.33%"


async def test_overall_progress_without_user_is_bad_request(client: AsyncClient) -> None:
    resp = await client.get("/api/progress/overall")

    assert resp.status_code == 400
    assert resp.json()["status"] == "error"


class _DisconnectedSession:
    """Session whose database connection is gone."""

    async def execute(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, ConnectionRefusedError("connection refused"))

    async def get(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, ConnectionRefusedError("connection refused"))

    async def rollback(self) -> None:
        pass


@pytest.fixture
def database_down(app: FastAPI) -> None:
    async def _disconnected() -> AsyncGenerator[_DisconnectedSession, None]:
        yield _DisconnectedSession()

    app.dependency_overrides[get_db_session] = _disconnected


@pytest.mark.usefixtures("database_down")
async def test_view_when_store_is_unavailable(client: AsyncClient) -> None:
    resp = await client.get("/api/progress/u1")

    assert resp.status_code == 503
    assert resp.json() == {
        "status": "error",
        "message": "Data store is unavailable",
        "error": "Failed to fetch library",
    }


@pytest.mark.usefixtures("database_down")
async def test_update_when_store_is_unavailable(client: AsyncClient) -> None:
    resp = await client.put("/api/progress/update", json={"user_id": "u1", "item_id": 1, "status": "COMPLETED"})

    assert resp.status_code == 503
    assert resp.json()["error"] == "Failed to update progress"


@pytest.mark.usefixtures("auth_enabled")
class TestProgressAuth:
    async def test_update_without_token(self, client: AsyncClient) -> None:
        resp = await client.put("/api/progress/update", json={"user_id": "u1", "item_id": 1, "status": "COMPLETED"})

        assert resp.status_code == 401
        assert resp.json()["message"] == "Unauthorized: No token provided"

    async def test_update_with_invalid_token(self, client: AsyncClient) -> None:
        resp = await client.put(
            "/api/progress/update",
            json={"user_id": "u1", "item_id": 1, "status": "COMPLETED"},
            headers={"Authorization": "Bearer not-a-jwt"},
        )

        assert resp.status_code == 403

    async def test_update_for_another_user(self, client: AsyncClient) -> None:
        token = create_access_token("u2")
        resp = await client.put(
            "/api/progress/update",
            json={"user_id": "u1", "item_id": 1, "status": "COMPLETED"},
            headers={"Authorization": f"Bearer {token}"},
        )

        assert resp.status_code == 403

    async def test_update_and_reset_own_progress(self, client: AsyncClient) -> None:
        headers = {"Authorization": f"Bearer {create_access_token('u1')}"}

        update = await client.put(
            "/api/progress/update",
            json={"user_id": "u1", "item_id": 1, "status": "COMPLETED"},
            headers=headers,
        )
        reset = await client.delete("/api/progress/reset/u1", headers=headers)

        assert update.status_code == 200
        assert reset.json()["data"] == {"deleted": 1}

    async def test_reading_progress_needs_no_token(self, client: AsyncClient) -> None:
        resp = await client.get("/api/progress/u1")

        assert resp.status_code == 200

"""Users Routes — end-to-end HTTP tests through FastAPI and SQLite.

Tests cover:
    - POST creates (201) and rejects empty names (400) with a typed error code
    - GET by id, PATCH partial update, DELETE, and NotFound (404) for unknown ids
    - GET list with filters and pagination metadata
    - Malformed pagination input -> 400
    - Every route goes through Endpoints.dispatch; a down database is 503
"""

import uuid

import pytest

from users_api.config import get_settings
from users_api.core.domain_types import OperationKind
from users_api.main import app, build_endpoints
from users_api.services.user_endpoints import Endpoints


async def _create(client, **body) -> dict:
    payload = {"first_name": "Ada", "last_name": "Lovelace", **body}
    res = await client.post("/api/v1/users", json=payload)
    assert res.status_code == 201, res.text
    return res.json()["data"]


# ─── create ──────────────────────────────────────────────────────

async def test_create_returns_201_with_user(client):
    res = await client.post("/api/v1/users", json={
        "first_name": "Ada", "last_name": "Lovelace",
        "email": "ada@example.com", "phone": "555",
    })
    assert res.status_code == 201
    body = res.json()
    assert body["status"] == "success"
    data = body["data"]
    assert data["id"]
    assert data["first_name"] == "Ada"
    assert data["email"] == "ada@example.com"
    assert "created_at" in data


@pytest.mark.parametrize("payload, code", [
    ({"first_name": "", "last_name": "Lovelace"}, "FIRST_NAME_REQUIRED"),
    ({"last_name": "Lovelace"}, "FIRST_NAME_REQUIRED"),
    ({"first_name": "Ada", "last_name": ""}, "LAST_NAME_REQUIRED"),
])
async def test_create_rejects_empty_names(client, payload, code):
    res = await client.post("/api/v1/users", json=payload)
    assert res.status_code == 400
    body = res.json()
    assert body["status"] == "error"
    assert body["error"]["code"] == code
    assert body["error"]["category"] == "validation"


async def test_create_rejects_malformed_body(client):
    res = await client.post(
        "/api/v1/users", content="not json",
        headers={"Content-Type": "application/json"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


# ─── get ─────────────────────────────────────────────────────────

async def test_get_round_trip(client):
    created = await _create(client, email="ada@example.com")
    res = await client.get(f"/api/v1/users/{created['id']}")
    assert res.status_code == 200
    data = res.json()["data"]
    for key in ("id", "first_name", "last_name", "email", "phone"):
        assert data[key] == created[key]


async def test_get_unknown_id_is_404(client):
    res = await client.get(f"/api/v1/users/{uuid.uuid4()}")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


# ─── update ──────────────────────────────────────────────────────

async def test_patch_updates_only_supplied_fields(client):
    created = await _create(client, phone="555")
    res = await client.patch(
        f"/api/v1/users/{created['id']}", json={"email": "new@example.com"},
    )
    assert res.status_code == 200
    assert res.json()["data"] == "User updated successfully"

    data = (await client.get(f"/api/v1/users/{created['id']}")).json()["data"]
    assert data["email"] == "new@example.com"
    assert data["first_name"] == "Ada"
    assert data["last_name"] == "Lovelace"
    assert data["phone"] == "555"


async def test_patch_null_field_is_left_unchanged(client):
    created = await _create(client)
    res = await client.patch(
        f"/api/v1/users/{created['id']}", json={"first_name": None},
    )
    assert res.status_code == 200
    data = (await client.get(f"/api/v1/users/{created['id']}")).json()["data"]
    assert data["first_name"] == "Ada"


async def test_patch_empty_first_name_is_400(client):
    created = await _create(client)
    res = await client.patch(f"/api/v1/users/{created['id']}", json={"first_name": ""})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "FIRST_NAME_REQUIRED"


async def test_patch_unknown_id_is_404(client):
    res = await client.patch(f"/api/v1/users/{uuid.uuid4()}", json={"email": "x"})
    assert res.status_code == 404


# ─── delete ──────────────────────────────────────────────────────

async def test_delete_then_get_is_404(client):
    created = await _create(client)
    res = await client.delete(f"/api/v1/users/{created['id']}")
    assert res.status_code == 200
    assert res.json()["data"] == "User deleted successfully"
    res = await client.get(f"/api/v1/users/{created['id']}")
    assert res.status_code == 404


async def test_delete_unknown_id_is_404(client):
    res = await client.delete(f"/api/v1/users/{uuid.uuid4()}")
    assert res.status_code == 404


# ─── list ────────────────────────────────────────────────────────

async def test_list_third_page_of_twenty_three(client):
    for i in range(23):
        await _create(client, first_name=f"User{i:02d}")
    res = await client.get("/api/v1/users", params={"page": 3, "limit": 10})
    assert res.status_code == 200
    body = res.json()
    assert len(body["data"]) == 3
    assert body["meta"] == {
        "page": 3, "per_page": 10, "page_count": 3, "total_count": 23,
    }


async def test_list_uses_default_limit(client):
    for i in range(12):
        await _create(client, first_name=f"User{i:02d}")
    body = (await client.get("/api/v1/users")).json()
    assert len(body["data"]) == 10
    assert body["meta"]["per_page"] == 10


async def test_list_filters_by_name_substring(client):
    await _create(client, first_name="Mariana", last_name="Lopez")
    await _create(client, first_name="Juan", last_name="Perez")
    body = (await client.get("/api/v1/users", params={"last_name": "LOP"})).json()
    assert [u["first_name"] for u in body["data"]] == ["Mariana"]
    assert body["meta"]["total_count"] == 1


async def test_list_negative_page_is_400(client):
    res = await client.get("/api/v1/users", params={"page": -1})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_PAGINATION"


async def test_request_id_header_is_echoed_in_validation_errors(client):
    res = await client.post(
        "/api/v1/users", json={"first_name": "", "last_name": "Lovelace"},
        headers={"X-Request-ID": "req-42"},
    )
    assert res.status_code == 400
    context = res.json()["error"]["context"]
    assert context["request_id"] == "req-42"
    assert context["operation"] == "create"


async def test_request_id_header_is_echoed_in_not_found(client):
    res = await client.get(
        f"/api/v1/users/{uuid.uuid4()}", headers={"X-Request-ID": "req-43"},
    )
    assert res.status_code == 404
    context = res.json()["error"]["context"]
    assert context["request_id"] == "req-43"
    assert context["operation"] == "get"


async def test_list_non_integer_page_is_400(client):
    res = await client.get("/api/v1/users", params={"page": "two"})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


# ─── wiring ──────────────────────────────────────────────────────

async def test_routes_go_through_dispatch(client, monkeypatch):
    kinds = []
    original = Endpoints.dispatch

    async def recording_dispatch(self, ctx, request):
        kinds.append(request.kind)
        return await original(self, ctx, request)

    monkeypatch.setattr(Endpoints, "dispatch", recording_dispatch)

    user = await _create(client)
    await client.get(f"/api/v1/users/{user['id']}")
    await client.get("/api/v1/users")
    await client.patch(f"/api/v1/users/{user['id']}", json={"phone": "1"})
    await client.delete(f"/api/v1/users/{user['id']}")

    assert kinds == [
        OperationKind.CREATE, OperationKind.GET, OperationKind.GET_ALL,
        OperationKind.UPDATE, OperationKind.DELETE,
    ]


async def test_unreachable_database_is_503(client, unreachable_db_manager):
    app.state.endpoints = build_endpoints(unreachable_db_manager, get_settings())
    res = await client.get("/api/v1/users")
    assert res.status_code == 503
    assert res.json()["error"]["category"] == "storage"

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from statuspage.apps.api.main import create_app


def _client() -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=create_app()), base_url="http://test")


async def _bootstrap(client: AsyncClient, *, plan_type: str = "free") -> dict[str, int]:
    user_resp = await client.post(
        "/v1/users",
        json={
            "email": "owner@example.com",
            "password": "correct-horse",
            "first_name": "Olive",
            "last_name": "Owner",
            "role": "owner",
        },
    )
    assert user_resp.status_code == 201
    user_data = user_resp.json()["data"]
    assert "password_hash" not in user_data
    assert "password" not in user_data
    user_id = user_data["id"]
    org_resp = await client.post(
        "/v1/organizations",
        json={"name": "Acme", "slug": "acme", "plan_type": plan_type, "owner_id": user_id},
    )
    assert org_resp.status_code == 201
    return {"user_id": user_id, "organization_id": org_resp.json()["data"]["id"]}


@pytest.mark.asyncio
async def test_health_is_enveloped() -> None:
    async with _client() as client:
        response = await client.get("/v1/health", headers={"X-Request-Id": "req-123"})
    assert response.status_code == 200
    body = response.json()
    assert body["data"]["status"] == "ok"
    assert body["data"]["timestamp"]
    assert body["meta"] == {"request_id": "req-123", "api_version": "v1"}
    assert response.headers["X-Request-Id"] == "req-123"


@pytest.mark.asyncio
async def test_user_response_never_exposes_password_hash() -> None:
    async with _client() as client:
        ids = await _bootstrap(client)
        orgs = await client.get(f"/v1/users/{ids['user_id']}/organizations")
        duplicate = await client.post(
            "/v1/users",
            json={
                "email": "owner@example.com",
                "password": "another-pass",
                "first_name": "O",
                "last_name": "O",
            },
        )
    assert [org["slug"] for org in orgs.json()["data"]] == ["acme"]
    assert duplicate.status_code == 409
    assert duplicate.json()["error"]["code"] == "CONFLICT"


@pytest.mark.asyncio
async def test_free_plan_second_status_page_is_payment_required() -> None:
    async with _client() as client:
        ids = await _bootstrap(client)
        first = await client.post(
            "/v1/status-pages",
            json={"organization_id": ids["organization_id"], "name": "A", "slug": "a"},
        )
        second = await client.post(
            "/v1/status-pages",
            json={"organization_id": ids["organization_id"], "name": "B", "slug": "b"},
        )
        listing = await client.get(f"/v1/organizations/{ids['organization_id']}/status-pages")
    assert first.status_code == 201
    assert second.status_code == 402
    error = second.json()["error"]
    assert error["code"] == "QUOTA_EXCEEDED"
    assert error["message"] == "Plan limit exceeded. free plan allows maximum 1 status pages"
    assert error["details"] == {"plan_tier": "free", "resource_kind": "status_pages", "limit": 1}
    assert [page["name"] for page in listing.json()["data"]] == ["A"]


@pytest.mark.asyncio
async def test_status_page_patch_get_and_delete() -> None:
    async with _client() as client:
        ids = await _bootstrap(client)
        created = await client.post(
            "/v1/status-pages",
            json={"organization_id": ids["organization_id"], "name": "Main", "slug": "main"},
        )
        page_id = created.json()["data"]["id"]

        patched = await client.patch(f"/v1/status-pages/{page_id}", json={"description": "Prod"})
        slug_patch = await client.patch(f"/v1/status-pages/{page_id}", json={"slug": "other"})
        fetched = await client.get(f"/v1/status-pages/{page_id}")
        deleted = await client.delete(f"/v1/status-pages/{page_id}")
        missing = await client.get(f"/v1/status-pages/{page_id}")
        deleted_again = await client.delete("/v1/status-pages/999999")

    assert patched.status_code == 200
    assert patched.json()["data"]["description"] == "Prod"
    assert slug_patch.status_code == 422
    assert slug_patch.json()["error"]["code"] == "REQUEST_VALIDATION_ERROR"
    assert fetched.json()["data"]["slug"] == "main"
    assert deleted.json()["data"] == {"deleted": True}
    assert missing.status_code == 404
    assert missing.json()["error"]["message"] == f"Status page with id {page_id} not found"
    assert deleted_again.status_code == 200
    assert deleted_again.json()["data"] == {"deleted": False}


@pytest.mark.asyncio
async def test_incident_update_resolves_incident_over_http() -> None:
    async with _client() as client:
        ids = await _bootstrap(client, plan_type="pro")
        page = await client.post(
            "/v1/status-pages",
            json={"organization_id": ids["organization_id"], "name": "Main", "slug": "main"},
        )
        page_id = page.json()["data"]["id"]
        component = await client.post(
            "/v1/components", json={"status_page_id": page_id, "name": "API"}
        )
        component_id = component.json()["data"]["id"]
        incident = await client.post(
            "/v1/incidents",
            json={
                "status_page_id": page_id,
                "title": "API down",
                "description": "Timeouts",
                "created_by": ids["user_id"],
                "affected_component_ids": [component_id],
            },
        )
        incident_id = incident.json()["data"]["id"]
        update = await client.post(
            f"/v1/incidents/{incident_id}/updates",
            json={
                "title": "Resolved",
                "description": "Rolled back",
                "status": "resolved",
                "created_by": ids["user_id"],
            },
        )
        incidents = await client.get(f"/v1/status-pages/{page_id}/incidents")
        updates = await client.get(f"/v1/incidents/{incident_id}/updates")
        bad_fk = await client.post(
            "/v1/incidents",
            json={
                "status_page_id": page_id,
                "title": "Ghost",
                "description": "d",
                "created_by": ids["user_id"],
                "affected_component_ids": [999999],
            },
        )

    assert incident.status_code == 201
    assert incident.json()["data"]["status"] == "investigating"
    assert incident.json()["data"]["resolved_at"] is None
    assert update.status_code == 201
    listed = incidents.json()["data"][0]
    assert listed["status"] == "resolved"
    assert listed["resolved_at"] is not None
    assert [row["title"] for row in updates.json()["data"]] == ["Resolved"]
    assert bad_fk.status_code == 422
    assert bad_fk.json()["error"]["code"] == "REFERENTIAL_VIOLATION"


@pytest.mark.asyncio
async def test_maintenance_window_lifecycle_over_http() -> None:
    async with _client() as client:
        ids = await _bootstrap(client, plan_type="pro")
        page = await client.post(
            "/v1/status-pages",
            json={"organization_id": ids["organization_id"], "name": "Main", "slug": "main"},
        )
        page_id = page.json()["data"]["id"]
        window = await client.post(
            "/v1/maintenance-windows",
            json={
                "status_page_id": page_id,
                "title": "Upgrade",
                "description": "Kernel patching",
                "scheduled_start": "2030-01-01T02:00:00Z",
                "scheduled_end": "2030-01-01T04:00:00Z",
                "created_by": ids["user_id"],
            },
        )
        window_id = window.json()["data"]["id"]
        started = await client.patch(
            f"/v1/maintenance-windows/{window_id}", json={"status": "in_progress"}
        )
        completed = await client.patch(
            f"/v1/maintenance-windows/{window_id}", json={"status": "completed"}
        )
        reset = await client.patch(f"/v1/maintenance-windows/{window_id}", json={"status": "scheduled"})
        listing = await client.get(f"/v1/status-pages/{page_id}/maintenance-windows")
        invalid = await client.post(
            "/v1/maintenance-windows",
            json={
                "status_page_id": page_id,
                "title": "Bad",
                "description": "d",
                "scheduled_start": "2030-01-01T02:00:00Z",
                "scheduled_end": "2030-01-01T04:00:00Z",
                "created_by": ids["user_id"],
                "affected_component_ids": [999, 1000],
            },
        )

    assert window.status_code == 201
    assert window.json()["data"]["status"] == "scheduled"
    assert started.json()["data"]["actual_start"] is not None
    assert started.json()["data"]["actual_end"] is None
    assert completed.json()["data"]["actual_end"] is not None
    assert reset.json()["data"]["actual_start"] is None
    assert reset.json()["data"]["actual_end"] is None
    assert [row["id"] for row in listing.json()["data"]] == [window_id]
    assert invalid.status_code == 422
    assert invalid.json()["error"]["message"] == (
        "Components with ids 999, 1000 not found or do not belong to the status page"
    )
    assert invalid.json()["error"]["details"]["component_ids"] == [999, 1000]


@pytest.mark.asyncio
async def test_unknown_fields_and_bad_enums_are_rejected() -> None:
    async with _client() as client:
        extra = await client.post(
            "/v1/organizations",
            json={"name": "Acme", "slug": "acme", "owner_id": 1, "id": 5},
        )
        bad_plan = await client.post(
            "/v1/organizations",
            json={"name": "Acme", "slug": "acme", "owner_id": 1, "plan_type": "platinum"},
        )
        missing_org = await client.get("/v1/organizations/999999/status-pages")
    assert extra.status_code == 422
    assert bad_plan.status_code == 422
    assert bad_plan.json()["error"]["code"] == "REQUEST_VALIDATION_ERROR"
    assert missing_org.status_code == 404
    assert missing_org.json()["error"]["code"] == "NOT_FOUND"

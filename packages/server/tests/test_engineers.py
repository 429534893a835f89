"""
Integration tests for the Engineer collection: CRUD, availability filter, stats.
"""

from __future__ import annotations

import uuid

import pytest


@pytest.mark.asyncio
async def test_create_trims_and_returns_201(client):
    response = await client.post("/api/v1/engineers/", json={"name": " David Kim ", "role": "DevOps Engineer"})
    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "David Kim"
    assert body["role"] == "DevOps Engineer"
    uuid.UUID(body["id"])


@pytest.mark.asyncio
async def test_create_requires_name_and_role(client):
    response = await client.post("/api/v1/engineers/", json={"name": "", "role": "  "})
    assert response.status_code == 400
    errors = response.json()["error"]["errors"]
    assert "Engineer name is required and must be a non-empty string" in errors
    assert "Engineer role is required and must be a non-empty string" in errors


@pytest.mark.asyncio
async def test_update(client, make_engineer):
    engineer = await make_engineer()
    response = await client.put(
        "/api/v1/engineers/",
        json={"id": engineer["id"], "name": "Sarah J.", "role": "Staff Engineer"},
    )
    assert response.status_code == 200
    assert response.json()["role"] == "Staff Engineer"


@pytest.mark.asyncio
async def test_update_unknown_is_404(client):
    response = await client.put(
        "/api/v1/engineers/",
        json={"id": str(uuid.uuid4()), "name": "Nobody", "role": "Ghost"},
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_update_without_id_is_400(client):
    response = await client.put("/api/v1/engineers/", json={"name": "A", "role": "B"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_delete_unknown_still_succeeds(client):
    """Engineer delete does not check existence first."""
    ghost = str(uuid.uuid4())
    response = await client.delete("/api/v1/engineers/", params={"id": ghost})
    assert response.status_code == 200
    assert response.json()["id"] == ghost


@pytest.mark.asyncio
async def test_delete_requires_id(client):
    response = await client.delete("/api/v1/engineers/")
    assert response.status_code == 400
    assert response.json()["error"]["errors"] == ["Engineer ID is required"]


@pytest.mark.asyncio
async def test_delete_cascades_assignments(client, make_project, make_engineer, assign):
    project = await make_project()
    gone = await make_engineer(name="Leaving")
    stays = await make_engineer(name="Staying")
    await assign(project["id"], gone["id"])
    kept = await assign(project["id"], stays["id"])

    response = await client.delete("/api/v1/engineers/", params={"id": gone["id"]})
    assert response.status_code == 200

    links = (await client.get("/api/v1/assignments/")).json()
    assert [link["id"] for link in links] == [kept["id"]]


@pytest.mark.asyncio
async def test_filter_and_stats(client, make_project, make_engineer, assign):
    p1 = await make_project(name="P1")
    p2 = await make_project(name="P2")
    busy = await make_engineer(name="Busy")
    idle = await make_engineer(name="Idle")
    await assign(p1["id"], busy["id"])
    await assign(p2["id"], busy["id"])

    async def names(mode):
        resp = await client.get("/api/v1/engineers/", params={"filter": mode})
        assert resp.status_code == 200
        return [e["name"] for e in resp.json()]

    assert await names("available") == ["Idle"]
    assert await names("assigned") == ["Busy"]
    assert await names("all") == ["Busy", "Idle"]
    assert await names("bogus") == ["Busy", "Idle"]

    stats = (await client.get("/api/v1/engineers/stats")).json()
    assert stats == {"total": 2, "assigned": 1, "available": 1}

"""
Shared fixtures: an in-memory SQLite store swapped in for the real database.
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool

from app.core.database import (
    build_engine,
    build_session_factory,
    create_tables,
    get_session,
    session_scope,
)
from app.main import app


@pytest.fixture
async def session_factory():
    engine = build_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_tables(engine)

    yield build_session_factory(engine)
    await engine.dispose()


@pytest.fixture
async def client(session_factory):
    async def _override_session():
        async with session_scope(session_factory) as session:
            yield session

    app.dependency_overrides[get_session] = _override_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def make_project(client):
    async def _make(name="Mobile App Development", status="Active", **extra):
        resp = await client.post("/api/v1/projects/", json={"name": name, "status": status, **extra})
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _make


@pytest.fixture
def make_engineer(client):
    async def _make(name="Sarah Johnson", role="Senior Frontend Developer"):
        resp = await client.post("/api/v1/engineers/", json={"name": name, "role": role})
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _make


@pytest.fixture
def assign(client):
    async def _assign(project_id, engineer_id):
        resp = await client.post(
            "/api/v1/assignments/",
            json={"projectId": project_id, "engineerId": engineer_id},
        )
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _assign

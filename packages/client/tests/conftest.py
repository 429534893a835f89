"""
Client fixtures: a TrackerApi wired straight into the ASGI app, backed by an
in-memory SQLite store.
"""

import asyncio

import pytest
from httpx import ASGITransport
from sqlalchemy.pool import StaticPool

from app.core.database import (
    build_engine,
    build_session_factory,
    create_tables,
    get_session,
    session_scope,
)
from app.main import app

from tracker_client.api import TrackerApi
from tracker_client.dashboard import Dashboard


class SerialASGITransport(ASGITransport):
    """Runs one request at a time; the in-memory store is a single shared connection."""

    def __init__(self, app):
        super().__init__(app=app)
        self._lock = asyncio.Lock()

    async def handle_async_request(self, request):
        async with self._lock:
            return await super().handle_async_request(request)


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
async def api(session_factory):
    async def _override_session():
        async with session_scope(session_factory) as session:
            yield session

    app.dependency_overrides[get_session] = _override_session
    async with TrackerApi("http://test/api/v1", transport=SerialASGITransport(app)) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
async def dashboard(api):
    board = Dashboard(api)
    await board.refresh()
    return board

"""
Tests for engine construction and the SQLite cascade behaviour.
"""

import pytest
from sqlalchemy import delete, func, select, text
from sqlalchemy.pool import StaticPool

from app.core.database import build_engine, session_scope
from app.models import Engineer, Project, ProjectAssignment


@pytest.mark.asyncio
async def test_sqlite_engine_enforces_foreign_keys():
    engine = build_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    try:
        async with engine.connect() as conn:
            result = await conn.execute(text("PRAGMA foreign_keys"))
            assert result.scalar() == 1
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_store_cascades_links_without_service_layer(session_factory):
    async with session_scope(session_factory) as session:
        project = Project(name="API Gateway Migration", status="Active", priority="P1")
        engineer = Engineer(name="Kevin Liu", role="Cloud Architect")
        session.add_all([project, engineer])
        await session.flush()
        session.add(ProjectAssignment(project_id=project.id, engineer_id=engineer.id))

    async with session_scope(session_factory) as session:
        await session.execute(delete(Project))

    async with session_scope(session_factory) as session:
        count = await session.scalar(select(func.count()).select_from(ProjectAssignment))
        assert count == 0


@pytest.mark.asyncio
async def test_session_scope_rolls_back_on_error(session_factory):
    with pytest.raises(RuntimeError):
        async with session_scope(session_factory) as session:
            session.add(Engineer(name="Temp", role="Contractor"))
            await session.flush()
            raise RuntimeError("abort")

    async with session_scope(session_factory) as session:
        assert await session.scalar(select(func.count()).select_from(Engineer)) == 0

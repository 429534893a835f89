"""
Engineer service layer: CRUD against the engineers table plus the
availability views derived from the assignment links.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.core.errors import NotFound, ValidationFailed
from app.models.engineer import Engineer
from app.services.assignments import detach_links, list_assignments
from resource_tracker_shared.reconcile import AnchorSide
from resource_tracker_shared.relations import engineer_stats, filtered_engineers
from resource_tracker_shared.schemas.common import EngineerFilter, EngineerStats
from resource_tracker_shared.schemas.engineers import EngineerCreate, EngineerUpdate


async def list_engineers(
    session: AsyncSession, mode: EngineerFilter = EngineerFilter.ALL
) -> list[Engineer]:
    result = await session.execute(select(Engineer).order_by(Engineer.created_at))
    engineers = list(result.scalars().all())
    if mode is EngineerFilter.ALL:
        return engineers
    links = await list_assignments(session)
    return filtered_engineers(engineers, links, mode)


async def get_engineer_stats(session: AsyncSession) -> EngineerStats:
    engineers = await list_engineers(session)
    links = await list_assignments(session)
    return engineer_stats(engineers, links)


async def create_engineer(session: AsyncSession, engineer_in: EngineerCreate) -> Engineer:
    engineer = Engineer(name=engineer_in.name, role=engineer_in.role)
    session.add(engineer)
    await session.flush()
    return engineer


async def update_engineer(session: AsyncSession, engineer_in: EngineerUpdate) -> Engineer:
    if engineer_in.id is None:
        raise ValidationFailed(["Engineer ID is required for update"])

    engineer = await session.get(Engineer, engineer_in.id)
    if not engineer:
        raise NotFound("Engineer not found")
    engineer.name = engineer_in.name
    engineer.role = engineer_in.role
    engineer.updated_at = datetime.now(timezone.utc)

    session.add(engineer)
    await session.flush()
    return engineer


async def delete_engineer(session: AsyncSession, engineer_id: uuid.UUID) -> None:
    """Delete an engineer and its links. Unknown ids succeed silently."""
    await detach_links(session, engineer_id, AnchorSide.ENGINEER)
    await session.execute(delete(Engineer).where(Engineer.id == engineer_id))
    await session.flush()

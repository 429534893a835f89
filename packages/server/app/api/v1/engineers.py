"""
Engineer endpoints: list (with availability filter), stats, create, update, delete.
"""

from __future__ import annotations

import uuid
from typing import List, Optional

import structlog
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_session
from app.core.errors import ValidationFailed
from app.services import engineers as engineer_service
from resource_tracker_shared.schemas.common import DeleteResult, EngineerFilter, EngineerStats
from resource_tracker_shared.schemas.engineers import (
    EngineerCreate,
    EngineerRead,
    EngineerUpdate,
)

router = APIRouter()
log = structlog.get_logger()


@router.get("/", response_model=List[EngineerRead])
async def list_engineers(
    mode: Optional[str] = Query(None, alias="filter"),
    session: AsyncSession = Depends(get_session),
):
    """List engineers. ``filter`` is all / available / assigned; anything else means all."""
    return await engineer_service.list_engineers(session, EngineerFilter.parse(mode))


@router.get("/stats", response_model=EngineerStats)
async def engineer_stats(session: AsyncSession = Depends(get_session)):
    return await engineer_service.get_engineer_stats(session)


@router.post("/", response_model=EngineerRead, status_code=201)
async def create_engineer(
    engineer_in: EngineerCreate,
    session: AsyncSession = Depends(get_session),
):
    engineer = await engineer_service.create_engineer(session, engineer_in)
    await session.commit()
    await session.refresh(engineer)

    log.info("engineer.created", engineer_id=str(engineer.id))
    return engineer


@router.put("/", response_model=EngineerRead)
async def update_engineer(
    engineer_in: EngineerUpdate,
    session: AsyncSession = Depends(get_session),
):
    engineer = await engineer_service.update_engineer(session, engineer_in)
    await session.commit()
    await session.refresh(engineer)

    log.info("engineer.updated", engineer_id=str(engineer.id))
    return engineer


@router.delete("/", response_model=DeleteResult)
async def delete_engineer(
    engineer_id: Optional[uuid.UUID] = Query(None, alias="id"),
    session: AsyncSession = Depends(get_session),
):
    """Delete an engineer. There is no existence check: unknown ids still return 200."""
    if engineer_id is None:
        raise ValidationFailed(["Engineer ID is required"])

    await engineer_service.delete_engineer(session, engineer_id)
    await session.commit()

    log.info("engineer.deleted", engineer_id=str(engineer_id))
    return DeleteResult(id=str(engineer_id), message="Engineer deleted successfully")

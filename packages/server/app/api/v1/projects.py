"""
Project endpoints: list, create, full update, delete.

Deleting a project removes its assignment links as well.
"""

from __future__ import annotations

import uuid
from typing import List, Literal, Optional

import structlog
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_session
from app.core.errors import ValidationFailed
from app.services import projects as project_service
from resource_tracker_shared.schemas.common import DeleteResult
from resource_tracker_shared.schemas.projects import (
    ProjectCreate,
    ProjectRead,
    ProjectUpdate,
)

router = APIRouter()
log = structlog.get_logger()


@router.get("/", response_model=List[ProjectRead])
async def list_projects(
    sort: Optional[Literal["priority"]] = None,
    session: AsyncSession = Depends(get_session),
):
    """List all projects; ``sort=priority`` orders them P1 first."""
    return await project_service.list_projects(session, by_priority=sort == "priority")


@router.post("/", response_model=ProjectRead, status_code=201)
async def create_project(
    project_in: ProjectCreate,
    session: AsyncSession = Depends(get_session),
):
    project = await project_service.create_project(session, project_in)
    await session.commit()
    await session.refresh(project)

    log.info("project.created", project_id=str(project.id), name=project.name)
    return project


@router.put("/", response_model=ProjectRead)
async def update_project(
    project_in: ProjectUpdate,
    session: AsyncSession = Depends(get_session),
):
    project = await project_service.update_project(session, project_in)
    await session.commit()
    await session.refresh(project)

    log.info("project.updated", project_id=str(project.id))
    return project


@router.delete("/", response_model=DeleteResult)
async def delete_project(
    project_id: Optional[uuid.UUID] = Query(None, alias="id"),
    session: AsyncSession = Depends(get_session),
):
    if project_id is None:
        raise ValidationFailed(["Project ID is required"])

    await project_service.delete_project(session, project_id)
    await session.commit()

    log.info("project.deleted", project_id=str(project_id))
    return DeleteResult(id=str(project_id), message="Project deleted successfully")

"""
Assignment endpoints: the project <-> engineer links.

There is no update; a link is either present or deleted.
"""

from __future__ import annotations

import uuid
from typing import List, Optional

import structlog
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_session
from app.core.errors import ValidationFailed
from app.services import assignments as assignment_service
from resource_tracker_shared.schemas.assignments import AssignmentCreate, AssignmentRead
from resource_tracker_shared.schemas.common import DeleteResult

router = APIRouter()
log = structlog.get_logger()


@router.get("/", response_model=List[AssignmentRead])
async def list_assignments(
    project_id: Optional[uuid.UUID] = Query(None, alias="projectId"),
    engineer_id: Optional[uuid.UUID] = Query(None, alias="engineerId"),
    session: AsyncSession = Depends(get_session),
):
    return await assignment_service.list_assignments(session, project_id, engineer_id)


@router.post("/", response_model=AssignmentRead, status_code=201)
async def create_assignment(
    assignment_in: AssignmentCreate,
    session: AsyncSession = Depends(get_session),
):
    assignment = await assignment_service.create_assignment(session, assignment_in)
    await session.commit()
    await session.refresh(assignment)

    log.info(
        "assignment.created",
        assignment_id=str(assignment.id),
        project_id=str(assignment.project_id),
        engineer_id=str(assignment.engineer_id),
    )
    return assignment


@router.delete("/", response_model=DeleteResult)
async def delete_assignment(
    assignment_id: Optional[uuid.UUID] = Query(None, alias="id"),
    session: AsyncSession = Depends(get_session),
):
    if assignment_id is None:
        raise ValidationFailed(["Assignment ID is required"])

    await assignment_service.delete_assignment(session, assignment_id)
    await session.commit()

    log.info("assignment.deleted", assignment_id=str(assignment_id))
    return DeleteResult(id=str(assignment_id), message="Assignment deleted successfully")

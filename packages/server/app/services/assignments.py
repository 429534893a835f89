"""
Assignment service layer: the project <-> engineer link table.

Handles:
- Listing links, optionally narrowed to one project or engineer
- Creating links after checking both ends exist
- Explicit cascade removal of an anchor's links (``detach_links``)
"""

from __future__ import annotations

import uuid
from typing import Optional

import structlog
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.core.errors import ValidationFailed
from app.models.assignments import ProjectAssignment
from app.models.engineer import Engineer
from app.models.project import Project
from resource_tracker_shared.reconcile import AnchorSide, detach
from resource_tracker_shared.schemas.assignments import AssignmentCreate

log = structlog.get_logger()


async def list_assignments(
    session: AsyncSession,
    project_id: Optional[uuid.UUID] = None,
    engineer_id: Optional[uuid.UUID] = None,
) -> list[ProjectAssignment]:
    stmt = select(ProjectAssignment)
    if project_id:
        stmt = stmt.where(ProjectAssignment.project_id == project_id)
    if engineer_id:
        stmt = stmt.where(ProjectAssignment.engineer_id == engineer_id)
    stmt = stmt.order_by(ProjectAssignment.created_at)

    result = await session.execute(stmt)
    return list(result.scalars().all())


async def create_assignment(
    session: AsyncSession, assignment_in: AssignmentCreate
) -> ProjectAssignment:
    errors = []
    if not await session.get(Project, assignment_in.project_id):
        errors.append(f"projectId {assignment_in.project_id} does not reference an existing project")
    if not await session.get(Engineer, assignment_in.engineer_id):
        errors.append(f"engineerId {assignment_in.engineer_id} does not reference an existing engineer")
    if errors:
        raise ValidationFailed(errors)

    assignment = ProjectAssignment(
        project_id=assignment_in.project_id,
        engineer_id=assignment_in.engineer_id,
    )
    session.add(assignment)
    await session.flush()
    return assignment


async def delete_assignment(session: AsyncSession, assignment_id: uuid.UUID) -> None:
    """Delete a link. Deleting an unknown id is not an error."""
    await session.execute(
        delete(ProjectAssignment).where(ProjectAssignment.id == assignment_id)
    )
    await session.flush()


async def detach_links(
    session: AsyncSession, anchor_id: uuid.UUID, side: AnchorSide
) -> int:
    """
    Remove every link of a project or engineer that is about to be deleted.

    The foreign keys also cascade, but not every store enforces them (SQLite
    without ``PRAGMA foreign_keys``), so links are removed explicitly.
    """
    if side is AnchorSide.PROJECT:
        links = await list_assignments(session, project_id=anchor_id)
    else:
        links = await list_assignments(session, engineer_id=anchor_id)

    doomed = detach(anchor_id, links, side)
    for link in doomed:
        await session.delete(link)
    await session.flush()
    if doomed:
        log.info("assignments.detached", anchor=side.value, anchor_id=str(anchor_id), count=len(doomed))
    return len(doomed)

"""
Project service layer: CRUD against the projects table.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.core.errors import NotFound, ValidationFailed
from app.models.project import Project
from app.services.assignments import detach_links
from resource_tracker_shared.reconcile import AnchorSide
from resource_tracker_shared.relations import sorted_projects_by_priority
from resource_tracker_shared.schemas.projects import ProjectCreate, ProjectUpdate


async def get_project_or_404(session: AsyncSession, project_id: uuid.UUID) -> Project:
    project = await session.get(Project, project_id)
    if not project:
        raise NotFound("Project not found")
    return project


async def list_projects(session: AsyncSession, by_priority: bool = False) -> list[Project]:
    result = await session.execute(select(Project).order_by(Project.created_at))
    projects = list(result.scalars().all())
    if by_priority:
        return sorted_projects_by_priority(projects)
    return projects


async def create_project(session: AsyncSession, project_in: ProjectCreate) -> Project:
    project = Project(
        name=project_in.name,
        status=project_in.status.value,
        priority=project_in.priority.value,
        description=project_in.description,
    )
    session.add(project)
    await session.flush()
    return project


async def update_project(session: AsyncSession, project_in: ProjectUpdate) -> Project:
    """Replace every editable field of an existing project."""
    if project_in.id is None:
        raise ValidationFailed(["Project ID is required for update"])

    project = await get_project_or_404(session, project_in.id)
    project.name = project_in.name
    project.status = project_in.status.value
    project.priority = project_in.priority.value
    project.description = project_in.description
    project.updated_at = datetime.now(timezone.utc)

    session.add(project)
    await session.flush()
    return project


async def delete_project(session: AsyncSession, project_id: uuid.UUID) -> None:
    project = await get_project_or_404(session, project_id)
    await detach_links(session, project.id, AnchorSide.PROJECT)
    await session.delete(project)
    await session.flush()

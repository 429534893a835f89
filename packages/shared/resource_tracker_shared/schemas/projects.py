from typing import Optional
from uuid import UUID
from datetime import datetime

from pydantic import field_validator

from .common import ProjectPriority, ProjectStatus, WireModel


class ProjectBase(WireModel):
    name: str
    status: ProjectStatus
    priority: ProjectPriority = ProjectPriority.UNPRIORITIZED
    description: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def _name_not_blank(cls, value):
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Project name is required and must be a non-empty string")
        return value.strip()

    @field_validator("priority", mode="before")
    @classmethod
    def _default_priority(cls, value):
        # null or "" means "not prioritised yet"
        if value is None or value == "":
            return ProjectPriority.UNPRIORITIZED
        return value

    @field_validator("description", mode="before")
    @classmethod
    def _clean_description(cls, value):
        if value is None:
            return None
        if not isinstance(value, str):
            raise ValueError("Project description must be a string")
        return value.strip() or None


class ProjectCreate(ProjectBase):
    pass


class ProjectUpdate(ProjectBase):
    """Full replacement of a project's editable fields."""

    id: Optional[UUID] = None


class ProjectRead(WireModel):
    id: UUID
    name: str
    status: ProjectStatus
    priority: ProjectPriority = ProjectPriority.UNPRIORITIZED
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

"""Project <-> engineer assignment links."""

import uuid

from sqlmodel import Field, SQLModel

from .base import CreatedAtMixin, UUIDMixin


class ProjectAssignment(UUIDMixin, CreatedAtMixin, SQLModel, table=True):
    """One edge of the many-to-many relation. Duplicate edges are not rejected."""

    __tablename__ = "project_assignments"

    project_id: uuid.UUID = Field(
        foreign_key="projects.id", ondelete="CASCADE", nullable=False, index=True
    )
    engineer_id: uuid.UUID = Field(
        foreign_key="engineers.id", ondelete="CASCADE", nullable=False, index=True
    )

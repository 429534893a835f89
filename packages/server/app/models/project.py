"""Project model."""

from typing import Optional

from sqlmodel import Field, SQLModel

from .base import TimestampMixin, UUIDMixin


class Project(UUIDMixin, TimestampMixin, SQLModel, table=True):
    __tablename__ = "projects"

    name: str = Field(max_length=255, nullable=False)
    status: str = Field(max_length=50, nullable=False)  # Active | Planning | On Hold
    priority: str = Field(default="Unprioritized", max_length=20, nullable=False)
    description: Optional[str] = None

"""Engineer model."""

from sqlmodel import Field, SQLModel

from .base import TimestampMixin, UUIDMixin


class Engineer(UUIDMixin, TimestampMixin, SQLModel, table=True):
    __tablename__ = "engineers"

    name: str = Field(max_length=255, nullable=False)
    role: str = Field(max_length=255, nullable=False)

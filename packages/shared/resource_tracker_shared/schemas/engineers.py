from typing import Optional
from uuid import UUID
from datetime import datetime

from pydantic import field_validator

from .common import WireModel


class EngineerBase(WireModel):
    name: str
    role: str

    @field_validator("name", "role", mode="before")
    @classmethod
    def _not_blank(cls, value, info):
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"Engineer {info.field_name} is required and must be a non-empty string")
        return value.strip()


class EngineerCreate(EngineerBase):
    pass


class EngineerUpdate(EngineerBase):
    id: Optional[UUID] = None


class EngineerRead(WireModel):
    id: UUID
    name: str
    role: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

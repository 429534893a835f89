from typing import Optional
from uuid import UUID
from datetime import datetime

from .common import WireModel


class AssignmentCreate(WireModel):
    project_id: UUID
    engineer_id: UUID


class AssignmentRead(WireModel):
    id: UUID
    project_id: UUID
    engineer_id: UUID
    created_at: Optional[datetime] = None

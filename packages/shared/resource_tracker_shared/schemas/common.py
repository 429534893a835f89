from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ProjectStatus(str, Enum):
    ACTIVE = "Active"
    PLANNING = "Planning"
    ON_HOLD = "On Hold"

class ProjectPriority(str, Enum):
    P1 = "P1"
    P2 = "P2"
    P3 = "P3"
    UNPRIORITIZED = "Unprioritized"

# Sort rank; anything not listed ranks last
PRIORITY_RANK: dict[str, int] = {
    ProjectPriority.P1.value: 1,
    ProjectPriority.P2.value: 2,
    ProjectPriority.P3.value: 3,
    ProjectPriority.UNPRIORITIZED.value: 4,
}
LOWEST_PRIORITY_RANK = 4

class EngineerFilter(str, Enum):
    ALL = "all"
    AVAILABLE = "available"
    ASSIGNED = "assigned"

    @classmethod
    def parse(cls, value) -> "EngineerFilter":
        """Resolve a filter mode, falling back to ALL for anything unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.ALL


class WireModel(BaseModel):
    """Base for payloads exchanged as camelCase JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class EngineerStats(WireModel):
    total: int = 0
    assigned: int = 0
    available: int = 0


class DeleteResult(BaseModel):
    id: str
    message: str


class ErrorDetail(BaseModel):
    code: str
    message: str
    status: int
    errors: List[str] = []


class ErrorResponse(BaseModel):
    error: ErrorDetail
    data: Optional[object] = None

# SQLModel definitions, imported here to ensure metadata is populated for create_all.
from .base import UUIDMixin, TimestampMixin, CreatedAtMixin  # noqa: F401
from .project import Project  # noqa: F401
from .engineer import Engineer  # noqa: F401
from .assignments import ProjectAssignment  # noqa: F401

from .common import EngineerFilter, EngineerStats, ProjectPriority, ProjectStatus  # noqa: F401
from .projects import ProjectCreate, ProjectRead, ProjectUpdate  # noqa: F401
from .engineers import EngineerCreate, EngineerRead, EngineerUpdate  # noqa: F401
from .assignments import AssignmentCreate, AssignmentRead  # noqa: F401

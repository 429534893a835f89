"""
Immutable in-memory copy of the server's collections.

A ``Mirror`` is never modified: every ``with_*`` / ``without_*`` call returns
a new one. Derived views delegate to ``resource_tracker_shared.relations``.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, replace
from typing import Iterable

from resource_tracker_shared import relations
from resource_tracker_shared.reconcile import AnchorSide, detach
from resource_tracker_shared.schemas.assignments import AssignmentRead
from resource_tracker_shared.schemas.common import EngineerFilter, EngineerStats
from resource_tracker_shared.schemas.engineers import EngineerRead
from resource_tracker_shared.schemas.projects import ProjectRead


def _upsert(items: tuple, item) -> tuple:
    if any(existing.id == item.id for existing in items):
        return tuple(item if existing.id == item.id else existing for existing in items)
    return items + (item,)


@dataclass(frozen=True)
class Mirror:
    projects: tuple[ProjectRead, ...] = ()
    engineers: tuple[EngineerRead, ...] = ()
    assignments: tuple[AssignmentRead, ...] = ()

    @classmethod
    def from_collections(
        cls,
        projects: Iterable[ProjectRead] = (),
        engineers: Iterable[EngineerRead] = (),
        assignments: Iterable[AssignmentRead] = (),
    ) -> "Mirror":
        return cls(tuple(projects), tuple(engineers), tuple(assignments))

    # --- Derived views ---

    def engineers_for_project(self, project_id: uuid.UUID) -> list[EngineerRead]:
        return relations.engineers_for_project(project_id, self.assignments, self.engineers)

    def projects_for_engineer(self, engineer_id: uuid.UUID) -> list[ProjectRead]:
        return relations.projects_for_engineer(engineer_id, self.assignments, self.projects)

    def filtered_engineers(self, mode: EngineerFilter | str = EngineerFilter.ALL) -> list[EngineerRead]:
        return relations.filtered_engineers(self.engineers, self.assignments, mode)

    def engineer_stats(self) -> EngineerStats:
        return relations.engineer_stats(self.engineers, self.assignments)

    def sorted_projects(self) -> list[ProjectRead]:
        return relations.sorted_projects_by_priority(self.projects)

    def links_of(self, anchor_id: uuid.UUID, side: AnchorSide) -> list[AssignmentRead]:
        return [a for a in self.assignments if getattr(a, side.anchor_attr) == anchor_id]

    # --- Updates ---

    def with_project(self, project: ProjectRead) -> "Mirror":
        return replace(self, projects=_upsert(self.projects, project))

    def without_project(self, project_id: uuid.UUID) -> "Mirror":
        return self._without_anchor(project_id, AnchorSide.PROJECT)

    def with_engineer(self, engineer: EngineerRead) -> "Mirror":
        return replace(self, engineers=_upsert(self.engineers, engineer))

    def without_engineer(self, engineer_id: uuid.UUID) -> "Mirror":
        return self._without_anchor(engineer_id, AnchorSide.ENGINEER)

    def with_links(
        self,
        removed: Iterable[AssignmentRead] = (),
        added: Iterable[AssignmentRead] = (),
    ) -> "Mirror":
        gone = {link.id for link in removed}
        kept = tuple(a for a in self.assignments if a.id not in gone)
        return replace(self, assignments=kept + tuple(added))

    def _without_anchor(self, anchor_id: uuid.UUID, side: AnchorSide) -> "Mirror":
        gone = {link.id for link in detach(anchor_id, self.assignments, side)}
        assignments = tuple(a for a in self.assignments if a.id not in gone)
        if side is AnchorSide.PROJECT:
            return replace(
                self,
                projects=tuple(p for p in self.projects if p.id != anchor_id),
                assignments=assignments,
            )
        return replace(
            self,
            engineers=tuple(e for e in self.engineers if e.id != anchor_id),
            assignments=assignments,
        )

"""
Dashboard: owns the current ``Mirror`` and runs the edit workflows.

An edit that changes assignment membership runs in three steps:

1. create or update the anchor (project or engineer);
2. delete the links ``reconcile`` marked for removal, concurrently;
3. insert the links it marked for addition, concurrently.

Nothing is rolled back. If a link step fails, ``AssignmentSyncError`` is
raised, the mirror is left as it was, and ``refresh()`` resynchronises.
"""

from __future__ import annotations

import asyncio
import uuid
from typing import Any, Awaitable, Iterable, Optional

import structlog

from resource_tracker_shared.reconcile import AnchorSide, ReconcilePlan, reconcile
from resource_tracker_shared.schemas.engineers import EngineerCreate, EngineerRead, EngineerUpdate
from resource_tracker_shared.schemas.projects import ProjectCreate, ProjectRead, ProjectUpdate

from .api import TrackerApi
from .mirror import Mirror

log = structlog.get_logger()


class AssignmentSyncError(Exception):
    """Some link deletions/insertions failed after the anchor was saved."""

    def __init__(self, anchor_id: uuid.UUID, failures: list[BaseException]):
        super().__init__(
            f"Failed to update assignments for {anchor_id}: "
            f"{len(failures)} operation(s) failed. Reload to see the current state."
        )
        self.anchor_id = anchor_id
        self.failures = failures


def _as_ids(values: Optional[Iterable[Any]]) -> list[uuid.UUID]:
    return [v if isinstance(v, uuid.UUID) else uuid.UUID(str(v)) for v in values or ()]


async def _gather_phase(calls: list[Awaitable]) -> tuple[list, list[BaseException]]:
    results = await asyncio.gather(*calls, return_exceptions=True)
    done = [r for r in results if not isinstance(r, BaseException)]
    failed = [r for r in results if isinstance(r, BaseException)]
    return done, failed


class Dashboard:
    """Client-side state holder for the resource tracker."""

    def __init__(self, api: TrackerApi, mirror: Mirror | None = None):
        self._api = api
        self._mirror = mirror if mirror is not None else Mirror()

    @property
    def mirror(self) -> Mirror:
        return self._mirror

    async def refresh(self) -> Mirror:
        self._mirror = await self._api.load_all()
        log.info(
            "dashboard.loaded",
            projects=len(self._mirror.projects),
            engineers=len(self._mirror.engineers),
            assignments=len(self._mirror.assignments),
        )
        return self._mirror

    # --- Projects ---

    async def create_project(
        self, project_in: ProjectCreate, engineer_ids: Iterable[Any] = ()
    ) -> ProjectRead:
        plan = reconcile(None, [], _as_ids(engineer_ids), AnchorSide.PROJECT)
        project = await self._api.create_project(project_in)
        await self._commit(self._mirror.with_project(project), plan.bind(project.id), project.id)
        return project

    async def update_project(
        self,
        project_id: Any,
        project_in: ProjectCreate,
        engineer_ids: Iterable[Any] = (),
    ) -> ProjectRead:
        desired = _as_ids(engineer_ids)
        payload = ProjectUpdate(id=project_id, **project_in.model_dump())
        project = await self._api.update_project(payload)
        plan = reconcile(
            project.id,
            self._mirror.links_of(project.id, AnchorSide.PROJECT),
            desired,
            AnchorSide.PROJECT,
        )
        await self._commit(self._mirror.with_project(project), plan, project.id)
        return project

    async def delete_project(self, project_id: Any) -> None:
        project_id = _as_ids([project_id])[0]
        await self._api.delete_project(project_id)
        # the server cascades; drop the same links locally
        self._mirror = self._mirror.without_project(project_id)

    # --- Engineers ---

    async def create_engineer(
        self, engineer_in: EngineerCreate, project_ids: Iterable[Any] = ()
    ) -> EngineerRead:
        plan = reconcile(None, [], _as_ids(project_ids), AnchorSide.ENGINEER)
        engineer = await self._api.create_engineer(engineer_in)
        await self._commit(self._mirror.with_engineer(engineer), plan.bind(engineer.id), engineer.id)
        return engineer

    async def update_engineer(
        self,
        engineer_id: Any,
        engineer_in: EngineerCreate,
        project_ids: Iterable[Any] = (),
    ) -> EngineerRead:
        desired = _as_ids(project_ids)
        payload = EngineerUpdate(id=engineer_id, **engineer_in.model_dump())
        engineer = await self._api.update_engineer(payload)
        plan = reconcile(
            engineer.id,
            self._mirror.links_of(engineer.id, AnchorSide.ENGINEER),
            desired,
            AnchorSide.ENGINEER,
        )
        await self._commit(self._mirror.with_engineer(engineer), plan, engineer.id)
        return engineer

    async def delete_engineer(self, engineer_id: Any) -> None:
        engineer_id = _as_ids([engineer_id])[0]
        await self._api.delete_engineer(engineer_id)
        self._mirror = self._mirror.without_engineer(engineer_id)

    # --- Link application ---

    async def _commit(self, mirror: Mirror, plan: ReconcilePlan, anchor_id: uuid.UUID) -> None:
        """Apply ``plan`` against the server, then publish ``mirror`` plus the link changes."""
        removed, failures = [], []
        if plan.to_remove:
            _, failures = await _gather_phase(
                [self._api.delete_assignment(link.id) for link in plan.to_remove]
            )
            removed = list(plan.to_remove)

        added = []
        if not failures and plan.to_add:
            added, failures = await _gather_phase(
                [self._api.create_assignment(create) for create in plan.creates()]
            )

        if failures:
            log.error(
                "dashboard.sync_failed",
                anchor=plan.side.value,
                anchor_id=str(anchor_id),
                failed=len(failures),
                error=str(failures[0]),
            )
            raise AssignmentSyncError(anchor_id, failures)

        self._mirror = mirror.with_links(removed=removed, added=added)
        if removed or added:
            log.info(
                "dashboard.assignments_synced",
                anchor=plan.side.value,
                anchor_id=str(anchor_id),
                removed=len(removed),
                added=len(added),
            )

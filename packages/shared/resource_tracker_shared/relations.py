"""
Derived views over the flat project / engineer / assignment collections.

Every function here is pure: inputs are never mutated, ``None`` collections
are treated as empty, and nothing raises for missing ids. Record fields
(``id``, ``project_id``, ``engineer_id``, ``priority``, ``name``) are read by
attribute, or by key when the record is a mapping, so ORM rows, Pydantic read
models and decoded JSON dicts are all accepted.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterable, Optional, Sequence, TypeVar

from .schemas.common import (
    LOWEST_PRIORITY_RANK,
    PRIORITY_RANK,
    EngineerFilter,
    EngineerStats,
)

T = TypeVar("T")


def _field(record: Any, name: str, default: Any = None) -> Any:
    if isinstance(record, Mapping):
        return record.get(name, default)
    return getattr(record, name, default)


def _linked_ids(assignments: Optional[Iterable[Any]], match_attr: str, match_id: Any, out_attr: str) -> set:
    return {
        _field(a, out_attr)
        for a in assignments or ()
        if _field(a, match_attr) == match_id
    }


def engineers_for_project(
    project_id: Any,
    assignments: Optional[Iterable[Any]],
    engineers: Optional[Sequence[T]],
) -> list[T]:
    """Engineers linked to ``project_id``, in engineers-collection order."""
    if project_id is None or not assignments or not engineers:
        return []
    engineer_ids = _linked_ids(assignments, "project_id", project_id, "engineer_id")
    return [e for e in engineers if _field(e, "id") in engineer_ids]


def projects_for_engineer(
    engineer_id: Any,
    assignments: Optional[Iterable[Any]],
    projects: Optional[Sequence[T]],
) -> list[T]:
    """Projects linked to ``engineer_id``, in projects-collection order."""
    if engineer_id is None or not assignments or not projects:
        return []
    project_ids = _linked_ids(assignments, "engineer_id", engineer_id, "project_id")
    return [p for p in projects if _field(p, "id") in project_ids]


def filtered_engineers(
    engineers: Optional[Sequence[T]],
    assignments: Optional[Iterable[Any]],
    mode: EngineerFilter | str | None = EngineerFilter.ALL,
) -> list[T]:
    """Filter engineers by availability. Unknown modes behave like ``all``."""
    engineers = list(engineers or ())
    mode = EngineerFilter.parse(mode)
    if mode is EngineerFilter.ALL:
        return engineers

    busy = {_field(a, "engineer_id") for a in assignments or ()}
    if mode is EngineerFilter.AVAILABLE:
        return [e for e in engineers if _field(e, "id") not in busy]
    return [e for e in engineers if _field(e, "id") in busy]


def engineer_stats(
    engineers: Optional[Sequence[Any]],
    assignments: Optional[Iterable[Any]],
) -> EngineerStats:
    """
    Headcount summary.

    ``assigned`` counts distinct engineers, so an engineer on three projects
    counts once. Links pointing at engineers outside ``engineers`` (a stale
    mirror) are ignored so ``available`` never goes negative.
    """
    engineers = engineers or ()
    known = {_field(e, "id") for e in engineers}
    assigned = len({_field(a, "engineer_id") for a in assignments or ()} & known)
    total = len(engineers)
    return EngineerStats(total=total, assigned=assigned, available=total - assigned)


def priority_rank(project: Any) -> int:
    priority = _field(project, "priority")
    # enum members and raw strings both resolve through .value / str
    key = getattr(priority, "value", priority)
    return PRIORITY_RANK.get(key, LOWEST_PRIORITY_RANK)


def sorted_projects_by_priority(projects: Optional[Iterable[T]]) -> list[T]:
    """Stable sort, P1 first; equal priorities keep their relative order."""
    return sorted(projects or (), key=priority_rank)


def is_engineer_available(engineer_id: Any, assignments: Optional[Iterable[Any]]) -> bool:
    if engineer_id is None or assignments is None:
        return False
    return not any(_field(a, "engineer_id") == engineer_id for a in assignments)


def format_project_list(projects: Optional[Sequence[Any]], empty_text: str = "No projects assigned") -> str:
    if not projects:
        return empty_text
    return ", ".join(str(_field(p, "name")) for p in projects)

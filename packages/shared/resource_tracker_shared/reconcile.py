"""
Assignment reconciliation.

Given the links an anchor entity (a project or an engineer) currently has and
the complete set of counterpart ids it should have after an edit, compute the
smallest set of link deletions and insertions that gets it there.

Nothing here performs I/O. Callers apply the plan: every ``to_remove`` link is
deleted and every ``to_add`` draft is inserted. The two groups never touch the
same link, so each group may run concurrently.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, NamedTuple, Optional

from .schemas.assignments import AssignmentCreate


class AnchorSide(str, Enum):
    """Which end of an assignment link is being edited."""

    PROJECT = "project"
    ENGINEER = "engineer"

    @property
    def anchor_attr(self) -> str:
        return "project_id" if self is AnchorSide.PROJECT else "engineer_id"

    @property
    def counterpart_attr(self) -> str:
        return "engineer_id" if self is AnchorSide.PROJECT else "project_id"


class LinkDraft(NamedTuple):
    """A link that should exist but does not yet."""

    anchor_id: Any
    counterpart_id: Any

    def to_create(self, side: AnchorSide = AnchorSide.PROJECT) -> AssignmentCreate:
        if side is AnchorSide.PROJECT:
            return AssignmentCreate(project_id=self.anchor_id, engineer_id=self.counterpart_id)
        return AssignmentCreate(project_id=self.counterpart_id, engineer_id=self.anchor_id)


@dataclass(frozen=True)
class ReconcilePlan:
    side: AnchorSide
    to_remove: tuple = field(default_factory=tuple)
    to_add: tuple[LinkDraft, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return not self.to_remove and not self.to_add

    def bind(self, anchor_id: Any) -> "ReconcilePlan":
        """Re-anchor the drafts, e.g. once a newly created project has an id."""
        return ReconcilePlan(
            side=self.side,
            to_remove=self.to_remove,
            to_add=tuple(LinkDraft(anchor_id, d.counterpart_id) for d in self.to_add),
        )

    def creates(self) -> list[AssignmentCreate]:
        return [d.to_create(self.side) for d in self.to_add]


def reconcile(
    anchor_id: Any,
    current_links: Optional[Iterable[Any]],
    desired_ids: Optional[Iterable[Any]],
    side: AnchorSide = AnchorSide.PROJECT,
) -> ReconcilePlan:
    """
    Diff an anchor's current links against its desired counterpart ids.

    ``desired_ids`` is the full target membership, not a delta. Duplicates in
    it collapse to a single draft. Links in ``current_links`` belonging to a
    different anchor are ignored; with ``anchor_id=None`` (an entity not yet
    created) every link is ignored and the plan only adds.
    """
    desired: list = []
    seen: set = set()
    for counterpart_id in desired_ids or ():
        if counterpart_id not in seen:
            seen.add(counterpart_id)
            desired.append(counterpart_id)

    links = [
        link
        for link in current_links or ()
        if anchor_id is not None and getattr(link, side.anchor_attr) == anchor_id
    ]
    linked = {getattr(link, side.counterpart_attr) for link in links}

    to_remove = tuple(
        link for link in links if getattr(link, side.counterpart_attr) not in seen
    )
    to_add = tuple(
        LinkDraft(anchor_id, counterpart_id)
        for counterpart_id in desired
        if counterpart_id not in linked
    )
    return ReconcilePlan(side=side, to_remove=to_remove, to_add=to_add)


def detach(anchor_id: Any, links: Optional[Iterable[Any]], side: AnchorSide) -> tuple:
    """Every link of ``anchor_id``; what a cascading delete has to remove."""
    return reconcile(anchor_id, links, (), side).to_remove

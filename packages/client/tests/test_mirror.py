"""
Unit tests for the immutable mirror and the CLI renderers built on it.
"""

import uuid

from resource_tracker_shared.reconcile import AnchorSide
from resource_tracker_shared.schemas.common import EngineerFilter
from resource_tracker_shared.schemas.assignments import AssignmentRead
from resource_tracker_shared.schemas.engineers import EngineerRead
from resource_tracker_shared.schemas.projects import ProjectRead

from tracker_client.dashboard import Dashboard
from tracker_client.main import render_engineers, render_projects, render_stats
from tracker_client.mirror import Mirror


def _project(name, priority="Unprioritized", status="Active"):
    return ProjectRead(id=uuid.uuid4(), name=name, status=status, priority=priority)


def _engineer(name, role="Engineer"):
    return EngineerRead(id=uuid.uuid4(), name=name, role=role)


def _link(project, engineer):
    return AssignmentRead(id=uuid.uuid4(), project_id=project.id, engineer_id=engineer.id)


def _sample():
    web = _project("Website Redesign", priority="P2")
    app = _project("Mobile App Development", priority="P1")
    ops = _project("Cloud Migration", status="Planning")
    sarah, mike, emily = _engineer("Sarah Johnson"), _engineer("Mike Chen"), _engineer("Emily Rodriguez")
    links = [_link(web, sarah), _link(app, sarah), _link(app, mike)]
    return Mirror.from_collections([web, app, ops], [sarah, mike, emily], links)


class TestViews:
    def test_relations(self):
        mirror = _sample()
        web, app, _ = mirror.projects
        sarah, mike, emily = mirror.engineers
        assert mirror.engineers_for_project(app.id) == [sarah, mike]
        assert mirror.projects_for_engineer(sarah.id) == [web, app]
        assert mirror.projects_for_engineer(emily.id) == []

    def test_filter_and_stats(self):
        mirror = _sample()
        assert [e.name for e in mirror.filtered_engineers("available")] == ["Emily Rodriguez"]
        assert len(mirror.filtered_engineers(EngineerFilter.ASSIGNED)) == 2
        assert len(mirror.filtered_engineers("bogus")) == 3
        stats = mirror.engineer_stats()
        assert (stats.total, stats.assigned, stats.available) == (3, 2, 1)

    def test_sorted_projects(self):
        names = [p.name for p in _sample().sorted_projects()]
        assert names == ["Mobile App Development", "Website Redesign", "Cloud Migration"]

    def test_links_of(self):
        mirror = _sample()
        sarah = mirror.engineers[0]
        assert len(mirror.links_of(sarah.id, AnchorSide.ENGINEER)) == 2
        assert mirror.links_of(uuid.uuid4(), AnchorSide.PROJECT) == []


class TestUpdates:
    def test_with_project_upserts(self):
        mirror = _sample()
        web = mirror.projects[0]
        renamed = web.model_copy(update={"name": "Website v2"})
        updated = mirror.with_project(renamed)
        assert updated.projects[0].name == "Website v2"
        assert len(updated.projects) == 3
        # source mirror untouched
        assert mirror.projects[0].name == "Website Redesign"

        added = mirror.with_project(_project("New"))
        assert len(added.projects) == 4

    def test_without_project_drops_links(self):
        mirror = _sample()
        app = mirror.projects[1]
        updated = mirror.without_project(app.id)
        assert app not in updated.projects
        assert all(a.project_id != app.id for a in updated.assignments)
        assert len(updated.assignments) == 1
        assert len(mirror.assignments) == 3

    def test_without_engineer_drops_links(self):
        mirror = _sample()
        sarah = mirror.engineers[0]
        updated = mirror.without_engineer(sarah.id)
        assert [e.name for e in updated.engineers] == ["Mike Chen", "Emily Rodriguez"]
        assert [a.engineer_id for a in updated.assignments] == [mirror.engineers[1].id]

    def test_with_links(self):
        mirror = _sample()
        web, _, ops = mirror.projects
        emily = mirror.engineers[2]
        new_link = _link(ops, emily)
        updated = mirror.with_links(removed=mirror.assignments[:1], added=[new_link])
        assert len(updated.assignments) == 3
        assert updated.assignments[-1] == new_link
        assert all(a.project_id != web.id for a in updated.assignments)


class TestRenderers:
    def test_render_projects(self):
        lines = render_projects(Dashboard(api=None, mirror=_sample()))
        assert lines == [
            "[P1] Mobile App Development (Active): Sarah Johnson, Mike Chen",
            "[P2] Website Redesign (Active): Sarah Johnson",
            "[Unprioritized] Cloud Migration (Planning): -",
        ]

    def test_render_engineers(self):
        board = Dashboard(api=None, mirror=_sample())
        assert render_engineers(board, EngineerFilter.AVAILABLE) == [
            "Emily Rodriguez (Engineer): No projects assigned"
        ]
        assert render_engineers(board, EngineerFilter.ASSIGNED)[0] == (
            "Sarah Johnson (Engineer): Website Redesign, Mobile App Development"
        )

    def test_render_stats(self):
        assert render_stats(Dashboard(api=None, mirror=_sample())) == [
            "Total engineers: 3",
            "Assigned: 2",
            "Available: 1",
        ]

"""
Dashboard CLI entry point.

Loads configuration, configures logging, fetches the tracker state, and
prints one of the dashboard views.
"""

from __future__ import annotations

import argparse
import asyncio
import sys

import structlog

from resource_tracker_shared.logging_setup import configure_logging
from resource_tracker_shared.relations import format_project_list
from resource_tracker_shared.schemas.common import EngineerFilter

from .api import ApiError, TrackerApi
from .config import ClientConfig, load_config
from .dashboard import Dashboard


def render_projects(dashboard: Dashboard) -> list[str]:
    mirror = dashboard.mirror
    lines = []
    for project in mirror.sorted_projects():
        names = ", ".join(e.name for e in mirror.engineers_for_project(project.id)) or "-"
        lines.append(f"[{project.priority.value}] {project.name} ({project.status.value}): {names}")
    return lines


def render_engineers(dashboard: Dashboard, mode: EngineerFilter) -> list[str]:
    mirror = dashboard.mirror
    lines = []
    for engineer in mirror.filtered_engineers(mode):
        projects = format_project_list(mirror.projects_for_engineer(engineer.id))
        lines.append(f"{engineer.name} ({engineer.role}): {projects}")
    return lines


def render_stats(dashboard: Dashboard) -> list[str]:
    stats = dashboard.mirror.engineer_stats()
    return [
        f"Total engineers: {stats.total}",
        f"Assigned: {stats.assigned}",
        f"Available: {stats.available}",
    ]


async def show(config: ClientConfig, view: str, mode: EngineerFilter) -> list[str]:
    async with TrackerApi(
        config.api.url,
        verify_tls=config.api.verify_tls,
        request_timeout=config.api.request_timeout_seconds,
    ) as api:
        dashboard = Dashboard(api)
        await dashboard.refresh()

    if view == "projects":
        return render_projects(dashboard)
    if view == "engineers":
        return render_engineers(dashboard, mode)
    return render_stats(dashboard)


def run() -> None:
    """CLI entry point for the dashboard."""
    parser = argparse.ArgumentParser(description="Resource Tracker dashboard")
    parser.add_argument(
        "-c", "--config",
        default="tracker-dashboard.yaml",
        help="Path to configuration file (default: tracker-dashboard.yaml)",
    )
    sub = parser.add_subparsers(dest="view", required=True)
    sub.add_parser("projects", help="Projects by priority with their engineers")
    engineers = sub.add_parser("engineers", help="Engineers with their projects")
    engineers.add_argument(
        "--filter",
        default=EngineerFilter.ALL.value,
        choices=[m.value for m in EngineerFilter],
    )
    sub.add_parser("stats", help="Engineer availability counts")
    args = parser.parse_args()

    try:
        config = load_config(args.config)
    except FileNotFoundError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    except Exception as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        sys.exit(1)

    configure_logging(config.logging.level, config.logging.format, stream=sys.stderr)
    log = structlog.get_logger()
    log.info("dashboard.config_loaded", config_path=args.config, api=config.api.url)

    mode = EngineerFilter.parse(getattr(args, "filter", None))
    try:
        lines = asyncio.run(show(config, args.view, mode))
    except ApiError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)

    for line in lines:
        print(line)


if __name__ == "__main__":
    run()

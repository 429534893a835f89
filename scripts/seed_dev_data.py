#!/usr/bin/env python3
"""Seed a development database with sample projects, engineers, and assignments.

Existing rows in all three tables are removed first.

Usage:
    python scripts/seed_dev_data.py

Reads RT_DATABASE_URL (defaults to a local Postgres).
"""

import asyncio

import structlog
from sqlalchemy import delete

from app.core.database import get_session_context, init_db
from app.models import Engineer, Project, ProjectAssignment
from app.services import assignments as assignment_service
from app.services import engineers as engineer_service
from app.services import projects as project_service
from resource_tracker_shared.logging_setup import configure_logging
from resource_tracker_shared.schemas.assignments import AssignmentCreate
from resource_tracker_shared.schemas.engineers import EngineerCreate
from resource_tracker_shared.schemas.projects import ProjectCreate

log = structlog.get_logger()

PROJECTS = [
    ("E-commerce Platform Redesign", "Active", "Complete redesign of the main e-commerce platform with modern UI/UX"),
    ("Mobile App Development", "Active", "Native iOS and Android app for customer engagement"),
    ("Data Analytics Dashboard", "Planning", "Real-time analytics dashboard for business intelligence"),
    ("API Gateway Migration", "Active", "Migration from legacy API infrastructure to cloud-native gateway"),
    ("Security Audit & Compliance", "On Hold", "Comprehensive security audit and GDPR compliance implementation"),
    ("Customer Support Portal", "Active", "Self-service portal for customer ticket management and FAQ system"),
    ("Machine Learning Pipeline", "Planning", "Automated ML pipeline for product recommendations and user behavior analysis"),
    ("Legacy System Modernization", "Active", "Migrate legacy Java monolith to microservices architecture"),
    ("Performance Optimization", "Planning", "Database optimization and caching implementation for improved response times"),
    ("Multi-tenant Architecture", "On Hold", "Implement multi-tenant support for enterprise clients"),
]

ENGINEERS = [
    ("Sarah Johnson", "Senior Frontend Developer"),
    ("Mike Chen", "Full Stack Engineer"),
    ("Emily Rodriguez", "Mobile Developer"),
    ("David Kim", "Backend Engineer"),
    ("Jessica Wu", "Data Engineer"),
    ("Alex Thompson", "DevOps Engineer"),
    ("Maria Gonzalez", "UI/UX Designer"),
    ("James Wilson", "Senior Backend Developer"),
    ("Lisa Chang", "Frontend Developer"),
    ("Robert Davis", "Security Engineer"),
    ("Amanda Foster", "Machine Learning Engineer"),
    ("Carlos Martinez", "Database Administrator"),
    ("Nina Patel", "QA Engineer"),
    ("Thomas Anderson", "Senior Full Stack Developer"),
    ("Rachel Green", "Frontend Developer"),
    ("Kevin Liu", "Cloud Architect"),
    ("Sophie Turner", "Product Manager"),
    ("Marcus Johnson", "Backend Engineer"),
    ("Isabella Chen", "Data Scientist"),
    ("Jordan Wright", "Site Reliability Engineer"),
]

# project name -> engineer names
TEAMS = {
    "E-commerce Platform Redesign": ["Sarah Johnson", "Mike Chen", "Maria Gonzalez", "Nina Patel"],
    "Mobile App Development": ["Emily Rodriguez", "Lisa Chang", "Sophie Turner", "Nina Patel"],
    "API Gateway Migration": ["Mike Chen", "David Kim", "Alex Thompson", "Kevin Liu"],
    "Customer Support Portal": ["Sarah Johnson", "Maria Gonzalez", "Lisa Chang", "Sophie Turner"],
    "Machine Learning Pipeline": ["Jessica Wu", "Amanda Foster", "Isabella Chen"],
    "Legacy System Modernization": ["David Kim", "Alex Thompson", "Carlos Martinez", "Thomas Anderson"],
}


async def seed():
    await init_db()

    async with get_session_context() as session:
        await session.execute(delete(ProjectAssignment))
        await session.execute(delete(Engineer))
        await session.execute(delete(Project))
        log.info("seed.cleared")

        projects = {}
        for name, status, description in PROJECTS:
            project = await project_service.create_project(
                session, ProjectCreate(name=name, status=status, description=description)
            )
            projects[name] = project.id

        engineers = {}
        for name, role in ENGINEERS:
            engineer = await engineer_service.create_engineer(
                session, EngineerCreate(name=name, role=role)
            )
            engineers[name] = engineer.id

        links = 0
        for project_name, team in TEAMS.items():
            for engineer_name in team:
                await assignment_service.create_assignment(
                    session,
                    AssignmentCreate(
                        project_id=projects[project_name],
                        engineer_id=engineers[engineer_name],
                    ),
                )
                links += 1

    log.info("seed.done", projects=len(projects), engineers=len(engineers), assignments=links)


if __name__ == "__main__":
    configure_logging("info", "text")
    asyncio.run(seed())

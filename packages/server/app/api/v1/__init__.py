"""
API v1 Router

One router per entity collection.
"""

from fastapi import APIRouter
from . import projects, engineers, assignments

router = APIRouter()

router.include_router(projects.router, prefix="/projects", tags=["Projects"])
router.include_router(engineers.router, prefix="/engineers", tags=["Engineers"])
router.include_router(assignments.router, prefix="/assignments", tags=["Assignments"])


@router.get("/", tags=["API"])
async def api_root():
    """API root: returns version and available endpoints."""
    return {
        "api": "v1",
        "version": "0.1.0",
        "endpoints": [
            "/projects",
            "/engineers",
            "/engineers/stats",
            "/assignments",
        ],
    }

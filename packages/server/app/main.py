"""
Resource Tracker API Server

Entry point for the FastAPI application.
"""

import structlog
from fastapi import FastAPI

from app.core.config import get_settings
from app.core.database import init_db
from app.core.errors import install_error_handlers
from resource_tracker_shared.logging_setup import configure_logging
from app.core.middleware import CORSHeadersMiddleware, UnhandledErrorMiddleware
from app.api.v1 import router as api_v1_router

settings = get_settings()
log = structlog.get_logger()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    configure_logging(settings.log_level, settings.log_format)

    app = FastAPI(
        title="Resource Tracker",
        description="Projects, engineers, and who is assigned to what.",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # Middleware (order matters: last added is outermost)
    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(CORSHeadersMiddleware, allow_origin=settings.cors_allow_origin)

    install_error_handlers(app)

    # API routes
    app.include_router(api_v1_router, prefix="/api/v1")

    @app.get("/health", tags=["System"])
    async def health_check():
        """Health check endpoint for liveness probes."""
        return {"status": "ok"}

    @app.on_event("startup")
    async def on_startup():
        log.info("Resource Tracker starting", debug=settings.debug)
        if settings.create_tables:
            await init_db()

    @app.on_event("shutdown")
    async def on_shutdown():
        log.info("Resource Tracker shutting down")

    return app


app = create_app()


def run() -> None:
    """CLI entry point: serve the API with uvicorn."""
    import uvicorn

    uvicorn.run("app.main:app", host=settings.host, port=settings.port)

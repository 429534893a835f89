"""
Database engine and session management for the tracker tables.

The store is Postgres in deployment and SQLite in development and tests.
SQLite only honours ``ON DELETE CASCADE`` on the assignment foreign keys when
``PRAGMA foreign_keys`` is set on each connection, so ``build_engine`` turns
it on for every SQLite engine it creates.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel

from app.core.config import get_settings

settings = get_settings()


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    @event.listens_for(engine.sync_engine, "connect")
    def _foreign_keys_on(dbapi_connection, _record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(url: str, echo: bool = False, **engine_kwargs) -> AsyncEngine:
    """Create an async engine; SQLite engines get foreign key enforcement."""
    engine = create_async_engine(url, echo=echo, **engine_kwargs)
    if engine.dialect.name == "sqlite":
        enable_sqlite_foreign_keys(engine)
    return engine


def build_session_factory(bind: AsyncEngine) -> sessionmaker:
    return sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


engine = build_engine(settings.database_url, echo=settings.debug)
async_session_factory = build_session_factory(engine)


async def create_tables(bind: AsyncEngine) -> None:
    """Create the projects, engineers and project_assignments tables if missing."""
    import app.models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def init_db() -> None:
    """Create all tables on the configured database (development only)."""
    await create_tables(engine)


@asynccontextmanager
async def session_scope(factory: sessionmaker = async_session_factory):
    """One unit of work: commit on success, roll back on any error."""
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    async with session_scope() as session:
        yield session


def get_session_context():
    """Session scope for use outside the request lifecycle (scripts)."""
    return session_scope()

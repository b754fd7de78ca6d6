"""
PC Builder Catalog API — Database Session Management
=====================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
Why:   Centralizes all database connection logic in one place.
How:   `Database` owns one async engine with connection pooling. It is created
       once in the application lifespan and stored on `app.state.db`; the
       `get_db_session` dependency reads it from there, so handlers never see
       a module-level connection handle and tests can override the dependency.
When:  Engine is created at startup; sessions are created per-request.

Connection Pooling Strategy:
    pool_size / max_overflow come from settings (defaults 10 + 10).
    pool_pre_ping validates connections before use (catches stale connections).
    pool_recycle=3600 recycles connections every hour.
"""

import logging
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    stop_after_attempt,
    wait_exponential_jitter,
)

from pcbuilder.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object between the models and Alembic's
    autogenerate.
    """
    pass


class Database:
    """
    Process-scoped owner of the engine and session factory.

    Lifecycle:
        1. Created in the lifespan from the validated settings
        2. `connect()` probes the server (retried with backoff); failure is fatal
        3. Handed to requests via `request.app.state.db`
        4. `dispose()` closes the pool on shutdown
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.engine: AsyncEngine = create_async_engine(
            settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
            echo=settings.log_level == "DEBUG",
        )
        # expire_on_commit=False: attributes stay readable after the request commits
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def ping(self) -> None:
        """Runs SELECT 1; raises whatever the driver raises."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def connect(self) -> None:
        """
        What:  Verifies the database is reachable before the app serves traffic.
        How:   tenacity retries the probe with exponential backoff and jitter;
               the last error is re-raised once attempts are exhausted.
        """
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.settings.db_connect_attempts),
            wait=wait_exponential_jitter(initial=1, max=self.settings.db_connect_max_wait),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                await self.ping()
        logger.info("DB Connected successfully!")

    async def dispose(self) -> None:
        await self.engine.dispose()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the app's Database
        2. Yields it to the route handler
        3. On success: commits (only the maintenance update writes anything)
        4. On error: rolls back and re-raises for the global error handlers
        5. Always: closes the session (returns connection to pool)

    Example usage in a route:
        @router.get("/categories")
        async def list_categories(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    database: Database = request.app.state.db
    async with database.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

"""
TurtleWatch Backend - Database Session Management
==================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   A `Database` object owns the engine (and so the connection pool) and
       the session factory. It is created once in the app lifespan, stored on
       `app.state.database`, and disposed at shutdown. Route handlers receive a
       per-request session through `get_db_session`.
Who:   main.py (lifecycle), route handlers (via Depends), tests.

Transaction Model:
    One session per request. The session commits when the handler returns
    and rolls back on any exception, so every multi-statement operation in a
    request (e.g. nest lookup + nest event insert) is one transaction.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from turtlewatch.config import Settings
from turtlewatch.exceptions import InternalError

logger = logging.getLogger(__name__)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models share this metadata; `Database.create_all()` builds the
    schema from it.
    """
    pass


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ships with foreign key enforcement off per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Process-scoped database resource: engine, pool and session factory.

    Lifecycle:
        created at startup → shared by all requests → disposed at shutdown
    """

    def __init__(self, settings: Settings):
        self.url = settings.database_url
        engine_kwargs: Dict[str, Any] = {
            # Echo SQL queries in DEBUG mode for development visibility
            "echo": settings.log_level == "DEBUG",
        }

        if settings.is_sqlite:
            # SQLite: default pool, no sizing options; FK checks switched on below
            pass
        else:
            engine_kwargs.update(
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
                pool_pre_ping=settings.db_pool_pre_ping,
                pool_recycle=3600,
            )
            # asyncpg: "require" encrypts without verifying the certificate
            if settings.database_ssl and self.url.startswith("postgresql+asyncpg"):
                engine_kwargs["connect_args"] = {"ssl": "require"}

        self.engine = create_async_engine(self.url, **engine_kwargs)

        if settings.is_sqlite:
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

        # expire_on_commit=False: returned rows stay readable after commit
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def create_all(self) -> None:
        """Create any missing tables. Existing tables are left untouched."""
        # Register every model with Base.metadata before creating
        import turtlewatch.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> None:
        """Round-trip a trivial query; raises if the database is unreachable."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Yield a session that commits on success and rolls back on error.

        Always closes the session, returning its connection to the pool.
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise  # Re-raise so the exception handlers can respond
            finally:
                await session.close()

    async def dispose(self) -> None:
        """Close all pooled connections. Called during application shutdown."""
        await self.engine.dispose()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    Example usage in a route:
        @router.get("/nests")
        async def list_nests(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    database: Optional[Database] = request.app.state.database
    if database is None:
        # Startup could not build the engine (logged by the lifespan)
        raise InternalError(context={"reason": "database unavailable"})
    async with database.session() as session:
        yield session

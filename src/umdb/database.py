"""Database engine and session management."""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from umdb.config import settings


def _enable_sqlite_savepoints(engine: AsyncEngine) -> None:
    """
    Let SQLAlchemy manage transactions on SQLite so SAVEPOINT works.

    The sqlite3 driver otherwise begins and commits on its own, which breaks
    the nested transactions the importer runs each item in.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record) -> None:
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _emit_begin(conn) -> None:
        # Writers queue on the lock instead of failing a SHARED to RESERVED upgrade
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_engine(url: str, **kwargs: Any) -> AsyncEngine:
    """
    Create an async engine for PostgreSQL (asyncpg) or SQLite (aiosqlite).

    Args:
        url: SQLAlchemy database URL
        **kwargs: Passed through to create_async_engine

    Returns:
        Configured engine
    """
    kwargs.setdefault("echo", settings.database_echo)
    async_engine = create_async_engine(url, **kwargs)
    if make_url(url).get_backend_name() == "sqlite":
        _enable_sqlite_savepoints(async_engine)
    return async_engine


def create_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


engine = create_engine(settings.database_url)
AsyncSessionLocal = create_session_factory(engine)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for FastAPI to provide database sessions.

    The session commits when the request succeeds and rolls back otherwise.

    Usage:
        @router.get("/endpoint")
        async def endpoint(db: AsyncSession = Depends(get_db)):
            # Use db here
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise

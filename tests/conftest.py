"""Shared test fixtures."""

import os

# Set env vars BEFORE any imports from the project happen
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("TMDB_API_KEY", "test-tmdb")
os.environ.setdefault("OMDB_API_KEY", "test-omdb")

from collections.abc import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from umdb.api.routes import external, health, matches  # noqa: E402
from umdb.database import create_engine, create_session_factory  # noqa: E402
from umdb.models import Base  # noqa: E402


@pytest.fixture
def test_app() -> FastAPI:
    """FastAPI app with the API routers but without CORS or logging setup."""
    app = FastAPI()
    app.include_router(health.router)
    app.include_router(matches.router, prefix="/api")
    app.include_router(external.router, prefix="/api")
    return app


@pytest.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Session on a fresh in-memory SQLite database with the full schema."""
    engine = create_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with create_session_factory(engine)() as session:
        yield session

    await engine.dispose()

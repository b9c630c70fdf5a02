"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to open sessions through the patched db_manager
    - db_manager patched so readiness probes and startup code see the test engine
    - Pose catalog seeded through the same upsert the app uses

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (FOR UPDATE is a no-op there; locking is exercised on PostgreSQL only)
"""

from uuid import UUID

import pytest
from sqlalchemy import update
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from yogalog.db.base import Base
from yogalog.db.seed import seed_poses
from yogalog.infrastructure.database import get_db, DatabaseSessionManager
from yogalog.models.score_card import ScoreCard
import yogalog.infrastructure.database as db_module
from yogalog.main import app
from tests.services.session_helpers import FULL_RATINGS


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def seeded_poses(test_db):
    """Full pose catalog in the test DB. Returns the number of poses."""
    return await seed_poses(test_db)


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async def override_get_db():
        async with fake_manager.session() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def rate_session(test_session_factory):
    """Write ratings straight into every card of a session (bypasses the API)."""
    async def _rate(session_id: str, **values):
        async with test_session_factory() as db:
            await db.execute(
                update(ScoreCard)
                .where(ScoreCard.session_id == UUID(session_id))
                .values(**(values or FULL_RATINGS)),
            )
            await db.commit()
    return _rate

"""Service test fixtures — async DB, repositories and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness check sees the test engine

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features not exercised here)
    - Deadlines built relative to the real clock: routes call the services
      without an injected `now`
"""

from datetime import datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

import perf_review.infrastructure.database as db_module
import perf_review.models  # noqa: F401
from perf_review.core.cycle_deadlines import CycleDeadlines
from perf_review.db.base import Base
from perf_review.infrastructure.database import DatabaseSessionManager, get_db
from perf_review.infrastructure.repositories import (
    SqlPeerFeedbackRepository,
    SqlPeerNominationRepository,
    SqlReviewCycleRepository,
)
from perf_review.main import app


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
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


# --- Repositories --------------------------------------------------------------

@pytest.fixture
def cycle_repo(test_db):
    return SqlReviewCycleRepository(test_db)


@pytest.fixture
def nomination_repo(test_db):
    return SqlPeerNominationRepository(test_db)


@pytest.fixture
def feedback_repo(test_db):
    return SqlPeerFeedbackRepository(test_db)


# --- Deadlines -----------------------------------------------------------------

def _deadlines_from(start: datetime, step: timedelta = timedelta(days=7)) -> CycleDeadlines:
    return CycleDeadlines.create(
        self_review=start,
        peer_feedback=start + step,
        manager_evaluation=start + 2 * step,
        calibration=start + 3 * step,
        feedback_delivery=start + 4 * step,
    )


@pytest.fixture
def open_deadlines() -> CycleDeadlines:
    """Peer-feedback window still open for the next week."""
    return _deadlines_from(datetime.now(timezone.utc))


@pytest.fixture
def closed_deadlines() -> CycleDeadlines:
    """Peer-feedback deadline already in the past."""
    return _deadlines_from(datetime.now(timezone.utc) - timedelta(days=10))

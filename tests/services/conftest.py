"""Service test fixtures — async DB, seeded day plans, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB sessions
    - db_manager patched so the readiness probe sees the test engine
    - owner_id owns seed_day_plan; stranger_id owns nothing unless a test says so

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for the
      association semantics (PostgreSQL-specific features not exercised here)
"""

from datetime import date
from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from wardrobe_calendar.db.base import Base
from wardrobe_calendar.infrastructure.database import get_db, DatabaseSessionManager
from wardrobe_calendar.models.day_plan import DayPlan
import wardrobe_calendar.infrastructure.database as db_module
from wardrobe_calendar.main import app


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
def owner_id():
    return uuid4()


@pytest.fixture
def stranger_id():
    return uuid4()


@pytest.fixture
async def seed_day_plan(test_db, owner_id):
    """A day plan owned by owner_id, with no associations."""
    plan = DayPlan(user_id=owner_id, plan_date=date(2026, 10, 19))
    test_db.add(plan)
    await test_db.commit()
    await test_db.refresh(plan)
    # Detached so a rollback inside the code under test cannot expire it
    test_db.expunge(plan)
    return plan


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


@pytest.fixture
def owner_headers(owner_id):
    return {"X-User-Id": str(owner_id)}


@pytest.fixture
def stranger_headers(stranger_id):
    return {"X-User-Id": str(stranger_id)}

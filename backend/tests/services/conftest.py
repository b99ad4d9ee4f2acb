"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB session
    - Lookup collaborators come from the root conftest fakes, injected both as
      dependency overrides and on app.state (readiness probe reads app.state)
    - db_manager patched so the readiness probe sees the test engine

Design Decisions:
    - SQLite in-memory with StaticPool: every session shares one connection, so
      rows written by the client are visible to test_db
    - Lifespan is not run by ASGITransport: nothing reads real JSON tables
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from pokebin.api.dependencies import get_image_resolver, get_set_builder
from pokebin.db.base import Base
from pokebin.infrastructure.database import get_db, DatabaseSessionManager
import pokebin.infrastructure.database as db_module
import pokebin.models  # noqa: F401
from pokebin.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", poolclass=StaticPool,
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
async def client(test_engine, set_builder, image_resolver):
    """FastAPI test client with DB and lookup dependencies overridden."""
    manager = DatabaseSessionManager(test_engine)

    async def override_get_db():
        async with manager.session() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_set_builder] = lambda: set_builder
    app.dependency_overrides[get_image_resolver] = lambda: image_resolver
    app.state.set_builder = set_builder
    app.state.image_resolver = image_resolver

    original_manager = db_module.db_manager
    db_module.db_manager = manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    del app.state.set_builder
    del app.state.image_resolver
    db_module.db_manager = original_manager

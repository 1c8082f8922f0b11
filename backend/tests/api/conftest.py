"""API test fixtures — FastAPI app over an in-memory SQLite session manager.

Invariants:
    - Every test gets a fresh in-memory database
    - get_db_manager overridden; module-level db_manager patched for the health routes

Design Decisions:
    - Real DatasourceService + SqlDatasourceRepository behind the routes:
      route tests exercise the full request path, not a mock
"""

import pytest
from httpx import ASGITransport, AsyncClient

import configstore.infrastructure.database as db_module
from configstore.db.base import Base
from configstore.infrastructure.database import DatabaseSessionManager, get_db_manager
from configstore.main import app


@pytest.fixture
async def test_manager():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    async with manager.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield manager
    await manager.dispose()


@pytest.fixture
async def client(test_manager, monkeypatch):
    """FastAPI test client with the session manager overridden."""
    app.dependency_overrides[get_db_manager] = lambda: test_manager
    monkeypatch.setattr(db_module, "db_manager", test_manager)

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()

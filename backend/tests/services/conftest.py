"""Service test fixtures — in-memory repository fake and real SQLite repository.

Invariants:
    - Every test gets a fresh store (fake dict or in-memory SQLite)
    - FakeDatasourceRepository records calls so tests can assert ordering

Design Decisions:
    - Fake repository for error-translation tests: failures are injected per
      operation without a database
    - SQLite in-memory for repository tests: fast, no external dependency
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

import configstore.models  # noqa: F401
from configstore.db.base import Base
from configstore.infrastructure.datasource_repository import SqlDatasourceRepository
from configstore.services.datasource_service import DatasourceService
from configstore.services.schema_registry import SchemaRegistry
from tests.services.fake_repository import FakeDatasourceRepository


@pytest.fixture
def fake_repository():
    return FakeDatasourceRepository()


@pytest.fixture
def registry():
    return SchemaRegistry.default()


@pytest.fixture
def service(fake_repository, registry):
    return DatasourceService(fake_repository, registry)


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
async def sql_repository(test_session_factory):
    return SqlDatasourceRepository(test_session_factory)


@pytest.fixture
async def sql_service(sql_repository, registry):
    return DatasourceService(sql_repository, registry)

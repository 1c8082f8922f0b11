"""Datasource Repository — SQLAlchemy implementation of DatasourceRepository.

Invariants:
    - create() fails KEY_CONFLICT when (project, name) exists (primary key violation)
    - delete()/get() fail KEY_NOT_FOUND when the key is absent
    - update() overwrites by key
    - list() filters on project only (empty project = every scope), ordered by (project, name)
    - Every SQLAlchemyError leaves as StorageError; other failures propagate untouched

Design Decisions:
    - One session per call: the service never spans a transaction across calls
"""

import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from configstore.core.domain_types import DatasourceQuery, StorageFailure
from configstore.core.errors import StorageError
from configstore.core.resources import Datasource
from configstore.models.datasource import DatasourceRow

logger = logging.getLogger(__name__)


class SqlDatasourceRepository:
    """Datasource persistence over an async session factory."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def create(self, entity: Datasource) -> None:
        async with self._session_factory() as db:
            try:
                db.add(DatasourceRow.from_resource(entity))
                await db.commit()
            except IntegrityError as e:
                await db.rollback()
                raise StorageError(
                    StorageFailure.KEY_CONFLICT,
                    f"{_key(entity.metadata.project, entity.metadata.name)} already exists",
                    "create",
                ) from e
            except SQLAlchemyError as e:
                await db.rollback()
                raise _unavailable(e, "create") from e

    async def update(self, entity: Datasource) -> None:
        async with self._session_factory() as db:
            try:
                await db.merge(DatasourceRow.from_resource(entity))
                await db.commit()
            except SQLAlchemyError as e:
                await db.rollback()
                raise _unavailable(e, "update") from e

    async def delete(self, project: str, name: str) -> None:
        async with self._session_factory() as db:
            try:
                result = await db.execute(
                    delete(DatasourceRow).where(
                        DatasourceRow.project == project,
                        DatasourceRow.name == name,
                    ),
                )
                await db.commit()
            except SQLAlchemyError as e:
                await db.rollback()
                raise _unavailable(e, "delete") from e
        if result.rowcount == 0:
            raise StorageError(
                StorageFailure.KEY_NOT_FOUND, f"{_key(project, name)} not found", "delete",
            )

    async def get(self, project: str, name: str) -> Datasource:
        async with self._session_factory() as db:
            try:
                row = await db.get(DatasourceRow, (project, name))
            except SQLAlchemyError as e:
                raise _unavailable(e, "get") from e
        if row is None:
            raise StorageError(
                StorageFailure.KEY_NOT_FOUND, f"{_key(project, name)} not found", "get",
            )
        return row.to_resource()

    async def list(self, query: DatasourceQuery) -> list[Datasource]:
        stmt = select(DatasourceRow).order_by(
            DatasourceRow.project, DatasourceRow.name,
        )
        if query.project:
            stmt = stmt.where(DatasourceRow.project == query.project)
        async with self._session_factory() as db:
            try:
                result = await db.execute(stmt)
            except SQLAlchemyError as e:
                raise _unavailable(e, "list") from e
            rows = result.scalars().all()
        return [row.to_resource() for row in rows]


def _key(project: str, name: str) -> str:
    return f"datasource {project}/{name}" if project else f"datasource {name}"


def _unavailable(error: SQLAlchemyError, operation: str) -> StorageError:
    logger.error(f"DB error during datasource {operation}: {error}")
    return StorageError(StorageFailure.UNAVAILABLE, "database operation failed", operation)

"""Datasource Service — lifecycle rules for the Datasource resource.

Invariants:
    - create/update accept only the Datasource variant of Resource (checked on the tag)
    - update requires metadata.name == parameters.name; an empty metadata.project
      is filled from parameters, a different one is rejected
    - update keeps created_at and bumps version from the stored copy
    - KEY_CONFLICT -> ConflictError, KEY_NOT_FOUND -> ResourceNotFoundError,
      any other StorageError -> InternalError (logged first, never leaked)
    - list() lets StorageError through untranslated; a failed default-uniqueness
      lookup during create/update is a BadRequestError like any validation failure
    - update fills an empty metadata.project before validating, so the default
      rule is checked in the scope the write lands in

Design Decisions:
    - Default uniqueness is read-then-write with no lock or transaction: two
      concurrent requests in one project can both install a default. Only
      (project, name) uniqueness is atomic, in the repository.
    - Logger injected at construction: callers route diagnostics explicitly
"""

import logging

from configstore.core.datasource_rules import filter_datasources
from configstore.core.domain_types import DatasourceQuery, Parameters, ResourceKind
from configstore.core.errors import (
    BadRequestError, ConflictError, ErrorContext, InternalError,
    ResourceNotFoundError, StorageError,
)
from configstore.core.repository_protocols import DatasourceRepository, DatasourceValidator
from configstore.core.resources import Datasource, Resource

_RESOURCE = "Datasource"


class DatasourceService:
    """Create/update/delete/get/list for datasources over injected collaborators."""

    def __init__(
        self,
        repository: DatasourceRepository,
        schemas: DatasourceValidator,
        logger: logging.Logger | None = None,
    ):
        self._repository = repository
        self._schemas = schemas
        self._logger = logger or logging.getLogger(__name__)

    async def create(self, entity: Resource) -> Datasource:
        datasource = self._require_datasource(entity)
        await self._validate_or_reject(datasource)
        datasource.metadata.create_now()
        try:
            await self._repository.create(datasource)
        except StorageError as e:
            if e.is_key_conflict:
                self._logger.debug(
                    f"unable to create the Datasource {datasource.metadata.name!r}, "
                    "it already exists",
                    extra=self._extra(datasource.metadata.project, datasource.metadata.name, "create"),
                )
                raise ConflictError(
                    _RESOURCE, datasource.metadata.name,
                    self._context(datasource.metadata.project, datasource.metadata.name, "create"),
                ) from e
            raise self._internal(
                e, datasource.metadata.project, datasource.metadata.name, "create",
            ) from e
        return datasource

    async def update(self, entity: Resource, parameters: Parameters) -> Datasource:
        datasource = self._require_datasource(entity)
        metadata = datasource.metadata
        # the default lookup must run against the scope the write will land in
        if not metadata.project:
            metadata.project = parameters.project
        await self._validate_or_reject(datasource)
        if metadata.name != parameters.name:
            self._logger.debug(
                f"name in Datasource {metadata.name!r} and name from the http "
                f"request {parameters.name!r} don't match",
            )
            raise BadRequestError(
                "metadata.name and the name in the http path request don't match",
                context=self._context(parameters.project, parameters.name, "update"),
            )
        if metadata.project != parameters.project:
            self._logger.debug(
                f"project in Datasource {metadata.project!r} and project from the "
                f"http request {parameters.project!r} don't match",
            )
            raise BadRequestError(
                "metadata.project and the project name in the http path request don't match",
                context=self._context(parameters.project, parameters.name, "update"),
            )

        previous = await self.get(parameters)
        metadata.update_from(previous.metadata)
        try:
            await self._repository.update(datasource)
        except StorageError as e:
            raise self._internal(e, metadata.project, metadata.name, "update") from e
        return datasource

    async def delete(self, parameters: Parameters) -> None:
        try:
            await self._repository.delete(parameters.project, parameters.name)
        except StorageError as e:
            raise self._translate_lookup(e, parameters, "delete") from e

    async def get(self, parameters: Parameters) -> Datasource:
        try:
            return await self._repository.get(parameters.project, parameters.name)
        except StorageError as e:
            raise self._translate_lookup(e, parameters, "get") from e

    async def list(
        self, query: DatasourceQuery, parameters: Parameters | None = None,
    ) -> list[Datasource]:
        """Scope listing from the repository, then kind/default filtering.

        Repository errors are not translated.
        """
        items = await self._repository.list(query)
        return filter_datasources(query.kind, query.default, items)

    # ─── Helpers ─────────────────────────────────────────────────

    def _require_datasource(self, entity: Resource) -> Datasource:
        if entity.kind != ResourceKind.DATASOURCE:
            raise BadRequestError(
                f"wrong entity format, attempting Datasource format, received {entity.kind!r}",
            )
        return entity

    async def _validate_or_reject(self, entity: Datasource) -> None:
        """Run _validate; any failure, storage included, is a bad request."""
        try:
            await self._validate(entity)
        except BadRequestError:
            raise
        except StorageError as e:
            raise BadRequestError(e.message) from e

    async def _validate(self, entity: Datasource) -> None:
        existing = None
        if entity.spec.default:
            # full scope, unfiltered: the validator needs every current default
            try:
                existing = await self._repository.list(
                    DatasourceQuery(project=entity.metadata.project),
                )
            except StorageError:
                self._logger.error(
                    f"unable to get the list of datasources of project "
                    f"{entity.metadata.project!r}",
                    exc_info=True,
                    extra=self._extra(entity.metadata.project, entity.metadata.name, "validate"),
                )
                raise
        try:
            self._schemas.validate(entity, existing)
        except BadRequestError:
            raise
        except ValueError as e:
            raise BadRequestError(str(e)) from e

    def _translate_lookup(
        self, error: StorageError, parameters: Parameters, operation: str,
    ) -> Exception:
        if error.is_key_not_found:
            self._logger.debug(
                f"unable to find the Datasource {parameters.name!r}",
                extra=self._extra(parameters.project, parameters.name, operation),
            )
            return ResourceNotFoundError(
                _RESOURCE, parameters.name,
                self._context(parameters.project, parameters.name, operation),
            )
        return self._internal(error, parameters.project, parameters.name, operation)

    def _internal(
        self, error: StorageError, project: str, name: str, operation: str,
    ) -> InternalError:
        self._logger.error(
            f"unable to {operation} the Datasource {name!r}, something wrong with the database: {error}",
            extra=self._extra(project, name, operation),
        )
        return InternalError(self._context(project, name, operation))

    @staticmethod
    def _context(project: str, name: str, operation: str) -> ErrorContext:
        return ErrorContext(project=project, name=name, operation=operation)

    @staticmethod
    def _extra(project: str, name: str, operation: str) -> dict:
        return {"project": project, "datasource": name, "operation": operation}

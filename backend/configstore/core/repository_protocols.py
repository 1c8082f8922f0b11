"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Repositories report failures as StorageError with a StorageFailure kind
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Async repository: implementations do IO; the validator is sync because
      schema checks are pure CPU work over values already in memory
"""

from typing import Protocol

from configstore.core.domain_types import DatasourceQuery
from configstore.core.resources import Datasource


class DatasourceRepository(Protocol):
    """Contract for datasource persistence — keyed by (project, name)."""
    async def create(self, entity: Datasource) -> None: ...
    async def update(self, entity: Datasource) -> None: ...
    async def delete(self, project: str, name: str) -> None: ...
    async def get(self, project: str, name: str) -> Datasource: ...
    async def list(self, query: DatasourceQuery) -> list[Datasource]: ...


class DatasourceValidator(Protocol):
    """Contract for plugin payload and cross-datasource rule validation.

    Raises SchemaValidationError when the entity is rejected.
    """
    def validate(
        self, entity: Datasource, existing: list[Datasource] | None,
    ) -> None: ...

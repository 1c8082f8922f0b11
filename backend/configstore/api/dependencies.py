"""Route Dependencies — wires the service to its collaborators per request.

Invariants:
    - One DatasourceService per request; it holds no state between requests
    - The session manager must be initialized (lifespan) before first use

Design Decisions:
    - Overridable via app.dependency_overrides: tests swap the service or the
      session manager without patching modules
"""

from fastapi import Depends

from configstore.config import Settings, get_settings
from configstore.infrastructure.database import DatabaseSessionManager, get_db_manager
from configstore.infrastructure.datasource_repository import SqlDatasourceRepository
from configstore.services.datasource_service import DatasourceService
from configstore.services.schema_registry import SchemaRegistry


def get_datasource_service(
    manager: DatabaseSessionManager = Depends(get_db_manager),
    settings: Settings = Depends(get_settings),
) -> DatasourceService:
    return DatasourceService(
        SqlDatasourceRepository(manager.session_factory),
        SchemaRegistry.default(strict=settings.strict_plugin_schemas),
    )

"""Health & Readiness — is this instance able to serve datasource requests.

Invariants:
    - GET /health/ returns 200 with the plugin kinds this instance validates
    - GET /health/ready returns 503 when the database is unreachable or the
      datasources table is missing, 200 otherwise
    - Readiness never creates tables; it only reports what is missing

Design Decisions:
    - Schema presence checked separately from connectivity: with
      database_create_tables off, a reachable but unmigrated database would
      otherwise pass readiness and fail every datasource request
    - Plugin kinds reported from the same registry factory the routes use,
      so liveness reflects strict_plugin_schemas
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

import configstore.infrastructure.database as database
from configstore.config import Settings, get_settings
from configstore.models.datasource import DatasourceRow
from configstore.services.schema_registry import SchemaRegistry

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])

_REQUIRED_TABLES = (DatasourceRow.__tablename__,)


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check(settings: Settings = Depends(get_settings)):
    """Liveness. Returns 200 while the process is up."""
    registry = SchemaRegistry.default(strict=settings.strict_plugin_schemas)
    return {
        "status": "healthy",
        "service": "configstore-api",
        "plugin_kinds": registry.kinds,
        "strict_plugin_schemas": registry.strict,
    }


@router.get("/ready")
async def readiness_check():
    """Readiness: database reachable and the datasources table present."""
    manager = database.db_manager
    if not manager or not await manager.health_check():
        return _not_ready("database_unavailable")

    missing = await manager.missing_tables(_REQUIRED_TABLES)
    if missing:
        logger.warning(f"readiness failed, missing tables: {missing}")
        return _not_ready("schema_not_migrated", missing_tables=missing)

    return {
        "status": "ready",
        "checks": {"database": "healthy", "schema": "migrated"},
    }


def _not_ready(reason: str, **details) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not_ready", "reason": reason, **details},
    )

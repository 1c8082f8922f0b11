"""Datasource Routes — HTTP mapping for the datasource lifecycle.

Invariants:
    - Project-scoped routes live under /api/v1/projects/{project}/datasources
    - A project-scoped POST fills an empty metadata.project from the path and
      rejects a different one
    - Global routes under /api/v1/datasources use the empty project
    - Request bodies are parsed as the Resource union; the service checks the variant
    - Errors are ConfigStoreError subclasses, rendered by the global handlers

Design Decisions:
    - Body parsed via TypeAdapter instead of a typed parameter: a bad body
      surfaces as BadRequestError with the same envelope as service errors
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Response, status
from pydantic import TypeAdapter, ValidationError

from configstore.api.dependencies import get_datasource_service
from configstore.core.domain_types import (
    GLOBAL_PROJECT, DatasourceQuery, Parameters, ResourceKind,
)
from configstore.core.errors import BadRequestError
from configstore.core.resources import Resource, ResourceVariant
from configstore.services.datasource_service import DatasourceService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["datasources"])

_resource_adapter = TypeAdapter(Resource)


def parse_resource(payload: dict[str, Any] = Body(...)) -> Resource:
    """Discriminate the request body into a Resource variant."""
    try:
        return _resource_adapter.validate_python(payload)
    except ValidationError as e:
        fields = ", ".join(
            ".".join(str(loc) for loc in err["loc"]) for err in e.errors()
        )
        raise BadRequestError(f"invalid resource: {fields}") from e


# ─── Project scope ──────────────────────────────────────────────

@router.post(
    "/projects/{project}/datasources", status_code=status.HTTP_201_CREATED,
)
async def create_project_datasource(
    project: str,
    entity: ResourceVariant = Depends(parse_resource),
    service: DatasourceService = Depends(get_datasource_service),
):
    if entity.kind == ResourceKind.DATASOURCE:
        if not entity.metadata.project:
            entity.metadata.project = project
        elif entity.metadata.project != project:
            logger.debug(
                f"project in Datasource {entity.metadata.project!r} and project "
                f"from the http request {project!r} don't match",
            )
            raise BadRequestError(
                "metadata.project and the project name in the http path request don't match",
            )
    created = await service.create(entity)
    return created.model_dump(mode="json")


@router.get("/projects/{project}/datasources")
async def list_project_datasources(
    project: str,
    kind: str = Query(""),
    default: bool | None = Query(None),
    service: DatasourceService = Depends(get_datasource_service),
):
    items = await service.list(
        DatasourceQuery(project=project, kind=kind, default=default),
        Parameters(project=project, name=""),
    )
    return [item.model_dump(mode="json") for item in items]


@router.get("/projects/{project}/datasources/{name}")
async def get_project_datasource(
    project: str, name: str,
    service: DatasourceService = Depends(get_datasource_service),
):
    entity = await service.get(Parameters(project=project, name=name))
    return entity.model_dump(mode="json")


@router.put("/projects/{project}/datasources/{name}")
async def update_project_datasource(
    project: str, name: str,
    entity: ResourceVariant = Depends(parse_resource),
    service: DatasourceService = Depends(get_datasource_service),
):
    updated = await service.update(entity, Parameters(project=project, name=name))
    return updated.model_dump(mode="json")


@router.delete(
    "/projects/{project}/datasources/{name}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_project_datasource(
    project: str, name: str,
    service: DatasourceService = Depends(get_datasource_service),
):
    await service.delete(Parameters(project=project, name=name))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ─── Global scope ───────────────────────────────────────────────

@router.post("/datasources", status_code=status.HTTP_201_CREATED)
async def create_datasource(
    entity: ResourceVariant = Depends(parse_resource),
    service: DatasourceService = Depends(get_datasource_service),
):
    created = await service.create(entity)
    return created.model_dump(mode="json")


@router.get("/datasources")
async def list_datasources(
    kind: str = Query(""),
    default: bool | None = Query(None),
    service: DatasourceService = Depends(get_datasource_service),
):
    """List across every scope (the empty project matches all)."""
    items = await service.list(
        DatasourceQuery(project=GLOBAL_PROJECT, kind=kind, default=default),
    )
    return [item.model_dump(mode="json") for item in items]


@router.get("/datasources/{name}")
async def get_datasource(
    name: str, service: DatasourceService = Depends(get_datasource_service),
):
    entity = await service.get(Parameters(project=GLOBAL_PROJECT, name=name))
    return entity.model_dump(mode="json")


@router.put("/datasources/{name}")
async def update_datasource(
    name: str,
    entity: ResourceVariant = Depends(parse_resource),
    service: DatasourceService = Depends(get_datasource_service),
):
    updated = await service.update(
        entity, Parameters(project=GLOBAL_PROJECT, name=name),
    )
    return updated.model_dump(mode="json")


@router.delete("/datasources/{name}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_datasource(
    name: str, service: DatasourceService = Depends(get_datasource_service),
):
    await service.delete(Parameters(project=GLOBAL_PROJECT, name=name))
    return Response(status_code=status.HTTP_204_NO_CONTENT)

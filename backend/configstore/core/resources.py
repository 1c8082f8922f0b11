"""Resources — the managed entities and their metadata bookkeeping.

Invariants:
    - metadata.name matches ^[a-zA-Z0-9_.-]+$ and is at most 75 characters
    - metadata.project == "" means the datasource is global (unscoped)
    - create_now() resets version to 0; update_from() increments the previous version
    - Timestamps are always timezone-aware UTC

Design Decisions:
    - Resource is a discriminated union on `kind`: the API boundary parses a
      closed set of variants, the service only checks the tag
    - plugin.spec stays an opaque dict here; its shape belongs to the schema registry
"""

from datetime import datetime, timezone
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field

from configstore.core.domain_types import GLOBAL_PROJECT

NAME_PATTERN = r"^[a-zA-Z0-9_.-]+$"
NAME_MAX_LENGTH = 75


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Metadata(BaseModel):
    """Identity and bookkeeping shared by every resource."""
    name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH, pattern=NAME_PATTERN)
    project: str = GLOBAL_PROJECT
    created_at: datetime | None = None
    updated_at: datetime | None = None
    version: int = Field(0, ge=0)

    def create_now(self) -> None:
        now = _now()
        self.created_at = now
        self.updated_at = now
        self.version = 0

    def update_from(self, previous: "Metadata") -> None:
        """Carry creation time and version forward from the stored copy."""
        self.created_at = previous.created_at
        self.updated_at = _now()
        self.version = previous.version + 1


class Display(BaseModel):
    name: str = ""
    description: str = ""


class Plugin(BaseModel):
    """Plugin selector: kind picks the payload schema, spec is the payload."""
    kind: str = Field(min_length=1)
    spec: dict[str, Any] = Field(default_factory=dict)


class DatasourceSpec(BaseModel):
    default: bool = False
    display: Display | None = None
    plugin: Plugin

    @property
    def kind(self) -> str:
        return self.plugin.kind


class Datasource(BaseModel):
    """A connection to an external data backend, scoped by project."""
    kind: Literal["Datasource"] = "Datasource"
    metadata: Metadata
    spec: DatasourceSpec


class ProjectMetadata(BaseModel):
    name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH, pattern=NAME_PATTERN)
    created_at: datetime | None = None
    updated_at: datetime | None = None
    version: int = Field(0, ge=0)


class Project(BaseModel):
    """Scope that groups datasources. Managed elsewhere; parsed here only."""
    kind: Literal["Project"] = "Project"
    metadata: ProjectMetadata


ResourceVariant = Union[Datasource, Project]
Resource = Annotated[ResourceVariant, Field(discriminator="kind")]

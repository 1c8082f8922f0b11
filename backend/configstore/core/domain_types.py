"""Domain Types — value objects shared by the service and its collaborators.

Invariants:
    - Parameters identifies exactly one datasource: (project, name)
    - Empty project means the global (unscoped) datasource namespace
    - DatasourceQuery filters are optional: empty kind / None default = no filter
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - Frozen dataclasses: request-scoped values never mutate after parsing
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass
from enum import Enum


GLOBAL_PROJECT = ""


# ─── Request Values ──────────────────────────────────────────────

@dataclass(frozen=True)
class Parameters:
    """Path-derived identity of the target datasource for get/update/delete."""
    project: str
    name: str


@dataclass(frozen=True)
class DatasourceQuery:
    """Filter set for listing datasources.

    project is pushed down to the repository; kind and default are applied
    in memory by the service over the returned scope.
    """
    project: str = GLOBAL_PROJECT
    kind: str = ""
    default: bool | None = None


# ─── Enums ───────────────────────────────────────────────────────

class ResourceKind(str, Enum):
    """Resource variants accepted at the API boundary."""
    DATASOURCE = "Datasource"
    PROJECT = "Project"


class StorageFailure(str, Enum):
    """Closed set of failure conditions a repository can report."""
    KEY_CONFLICT = "key_conflict"
    KEY_NOT_FOUND = "key_not_found"
    UNAVAILABLE = "unavailable"

"""Datasource Rules — pure filtering and default-uniqueness checks.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - filter_datasources preserves the input order
    - A datasource never conflicts with itself (same name) on the default rule
    - Default uniqueness is scoped per project only; the global scope ("")
      is just another project

Design Decisions:
    - Return the offending datasource (not an exception): the schema registry
      owns the error wording, this module only answers the question
"""

from configstore.core.resources import Datasource


def filter_datasources(
    kind: str, default: bool | None, items: list[Datasource],
) -> list[Datasource]:
    """Keep items whose plugin kind and default flag match the filters.

    An empty kind or a None default disables that filter.
    """
    return [
        item for item in items
        if (not kind or item.spec.kind == kind)
        and (default is None or item.spec.default == default)
    ]


def find_conflicting_default(
    entity: Datasource, existing: list[Datasource],
) -> Datasource | None:
    """First other datasource in the entity's project already marked default."""
    if not entity.spec.default:
        return None
    for other in existing:
        if other.metadata.project != entity.metadata.project:
            continue
        if other.metadata.name == entity.metadata.name:
            continue
        if other.spec.default:
            return other
    return None

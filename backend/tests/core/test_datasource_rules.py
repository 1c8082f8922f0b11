"""Datasource Rules — tests for pure filtering and default-uniqueness lookup.

Tests cover:
    - filter_datasources by kind, by default flag, both, and neither
    - filter_datasources preserves input order
    - find_conflicting_default ignores non-default entities, itself, other projects
"""

from configstore.core.datasource_rules import filter_datasources, find_conflicting_default
from tests.builders import make_datasource


def _names(items):
    return [d.metadata.name for d in items]


def _sample():
    return [
        make_datasource("a", kind="prometheus", default=True),
        make_datasource("b", kind="tempo"),
        make_datasource("c", kind="prometheus"),
        make_datasource("d", kind="prometheus"),
    ]


# ─── filter_datasources ──────────────────────────────────────────

def test_no_filters_returns_everything():
    assert _names(filter_datasources("", None, _sample())) == ["a", "b", "c", "d"]


def test_filter_by_kind_is_exact_match():
    assert _names(filter_datasources("prometheus", None, _sample())) == ["a", "c", "d"]
    assert filter_datasources("prom", None, _sample()) == []


def test_filter_by_default_false():
    assert _names(filter_datasources("", False, _sample())) == ["b", "c", "d"]


def test_filter_by_kind_and_default_preserves_order():
    items = list(reversed(_sample()))
    assert _names(filter_datasources("prometheus", False, items)) == ["d", "c"]


def test_filter_empty_list():
    assert filter_datasources("prometheus", True, []) == []


# ─── find_conflicting_default ────────────────────────────────────

def test_non_default_entity_never_conflicts():
    existing = [make_datasource("ds1", default=True)]
    assert find_conflicting_default(make_datasource("ds2"), existing) is None


def test_second_default_in_same_project_conflicts():
    existing = [make_datasource("ds1", default=True), make_datasource("ds3")]
    other = find_conflicting_default(make_datasource("ds2", default=True), existing)
    assert other is not None
    assert other.metadata.name == "ds1"


def test_entity_does_not_conflict_with_its_stored_self():
    existing = [make_datasource("ds1", default=True)]
    assert find_conflicting_default(make_datasource("ds1", default=True), existing) is None


def test_default_in_other_project_does_not_conflict():
    existing = [make_datasource("ds1", project="p2", default=True)]
    assert find_conflicting_default(make_datasource("ds2", default=True), existing) is None


def test_default_rule_ignores_plugin_kind():
    existing = [make_datasource("ds1", kind="tempo", default=True)]
    entity = make_datasource("ds2", kind="prometheus", default=True)
    assert find_conflicting_default(entity, existing) is not None

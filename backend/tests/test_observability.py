"""Structured Logging — formatter output for datasource service records.

Tests cover:
    - JSON: datasource context grouped from the service's extra keys
    - JSON: global scope (empty project) kept, absent keys omitted
    - JSON: error_code/path top-level, exceptions rendered
    - text: context appended as a suffix
    - end to end: a real service rejection formatted as JSON
"""

import json
import logging
import sys

import pytest

from configstore.core.domain_types import Parameters
from configstore.core.errors import ResourceNotFoundError
from configstore.infrastructure.observability import JSONFormatter, TextFormatter
from configstore.services.datasource_service import DatasourceService
from configstore.services.schema_registry import SchemaRegistry
from tests.services.fake_repository import FakeDatasourceRepository


def _record(msg="message", level=logging.INFO, exc_info=None, **extra):
    record = logging.LogRecord(
        "configstore.services.datasource_service", level, __file__, 1, msg, None, exc_info,
    )
    record.__dict__.update(extra)
    return record


# ─── JSONFormatter ───────────────────────────────────────────────

def test_json_groups_datasource_context():
    line = JSONFormatter().format(
        _record(project="p1", datasource="ds1", operation="create"),
    )
    log = json.loads(line)
    assert log["datasource"] == {"project": "p1", "name": "ds1", "operation": "create"}
    assert log["level"] == "INFO"
    assert log["logger"] == "configstore.services.datasource_service"
    assert log["message"] == "message"
    assert "project" not in log
    assert "operation" not in log


def test_json_keeps_global_scope_and_omits_absent_keys():
    log = json.loads(JSONFormatter().format(_record(project="", operation="list")))
    assert log["datasource"] == {"project": "", "operation": "list"}


def test_json_without_context_has_no_datasource_key():
    log = json.loads(JSONFormatter().format(_record()))
    assert set(log) == {"timestamp", "level", "logger", "message"}


def test_json_request_fields_stay_top_level():
    log = json.loads(JSONFormatter().format(
        _record(error_code="CONFLICT", path="/api/v1/datasources"),
    ))
    assert log["error_code"] == "CONFLICT"
    assert log["path"] == "/api/v1/datasources"
    assert "datasource" not in log


def test_json_renders_exception():
    try:
        raise RuntimeError("db down")
    except RuntimeError:
        exc_info = sys.exc_info()
    log = json.loads(JSONFormatter().format(
        _record(level=logging.ERROR, exc_info=exc_info, project="p1"),
    ))
    assert "RuntimeError: db down" in log["exception"]


# ─── TextFormatter ───────────────────────────────────────────────

def test_text_appends_context():
    line = TextFormatter().format(_record(project="p1", datasource="ds1", operation="get"))
    assert line.endswith("message [project='p1' name='ds1' operation='get']")


def test_text_without_context_is_plain():
    assert not TextFormatter().format(_record()).endswith("]")


# ─── service records ─────────────────────────────────────────────

@pytest.fixture
def service_logger():
    logger = logging.getLogger("tests.observability.service")
    logger.setLevel(logging.DEBUG)
    yield logger
    logger.setLevel(logging.NOTSET)


async def test_service_rejection_formats_with_context(service_logger, caplog):
    svc = DatasourceService(
        FakeDatasourceRepository(), SchemaRegistry.default(), logger=service_logger,
    )
    with caplog.at_level(logging.DEBUG, logger=service_logger.name):
        with pytest.raises(ResourceNotFoundError):
            await svc.get(Parameters(project="p1", name="missing"))

    log = json.loads(JSONFormatter().format(caplog.records[-1]))
    assert log["level"] == "DEBUG"
    assert log["datasource"] == {"project": "p1", "name": "missing", "operation": "get"}

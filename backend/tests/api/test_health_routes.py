"""Health Routes — liveness content and readiness against the datasources schema.

Tests cover:
    - liveness reports the registered plugin kinds and strict mode
    - readiness 200 when the database is reachable and migrated
    - readiness 503 with the missing table when the schema is absent
    - readiness 503 when no session manager is initialized
"""

import configstore.infrastructure.database as db_module
from configstore.infrastructure.database import DatabaseSessionManager


async def test_liveness_reports_plugin_kinds(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "healthy"
    assert body["plugin_kinds"] == ["loki", "prometheus", "tempo"]
    assert body["strict_plugin_schemas"] is True


async def test_readiness_with_migrated_schema(client):
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"] == {"database": "healthy", "schema": "migrated"}


async def test_readiness_reports_missing_datasources_table(client, monkeypatch):
    empty = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    monkeypatch.setattr(db_module, "db_manager", empty)
    try:
        res = await client.get("/api/v1/health/ready")
    finally:
        await empty.dispose()
    assert res.status_code == 503
    assert res.json() == {
        "status": "not_ready",
        "reason": "schema_not_migrated",
        "missing_tables": ["datasources"],
    }


async def test_readiness_without_database(client, monkeypatch):
    monkeypatch.setattr(db_module, "db_manager", None)
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 503
    assert res.json()["reason"] == "database_unavailable"

"""
Audit Log Middleware Tests
"""

import logging

import pytest
from httpx import AsyncClient

from backend.middleware.audit_log import resource_for_path


def audit_records(caplog) -> list[logging.LogRecord]:
    return [record for record in caplog.records if record.name == "audit"]


@pytest.mark.asyncio
async def test_request_is_logged(client: AsyncClient, caplog):
    with caplog.at_level(logging.INFO, logger="audit"):
        await client.get("/api/v1/forecasts/defaults")

    records = audit_records(caplog)
    assert len(records) == 1
    assert records[0].levelno == logging.INFO
    assert records[0].method == "GET"
    assert records[0].path == "/api/v1/forecasts/defaults"
    assert records[0].status == 200


@pytest.mark.asyncio
async def test_client_error_logged_as_warning(client: AsyncClient, caplog):
    with caplog.at_level(logging.INFO, logger="audit"):
        await client.post("/api/v1/variance/", json={})

    records = audit_records(caplog)
    assert records[0].levelno == logging.WARNING
    assert records[0].status == 422


@pytest.mark.asyncio
async def test_health_checks_are_skipped(client: AsyncClient, caplog):
    with caplog.at_level(logging.INFO, logger="audit"):
        await client.get("/health")

    assert audit_records(caplog) == []


@pytest.mark.asyncio
async def test_record_names_resource_and_request_id(client: AsyncClient, caplog):
    with caplog.at_level(logging.INFO, logger="audit"):
        resp = await client.get("/api/v1/forecasts/defaults")

    record = audit_records(caplog)[0]
    assert record.resource == "forecasts"
    assert record.request_id == resp.headers["X-Request-ID"]


@pytest.mark.asyncio
async def test_inbound_request_id_is_kept(client: AsyncClient, caplog):
    with caplog.at_level(logging.INFO, logger="audit"):
        resp = await client.post(
            "/api/v1/variance/",
            json={"projected": "1000"},
            headers={"X-Request-ID": "req-42"},
        )

    assert resp.headers["X-Request-ID"] == "req-42"
    assert audit_records(caplog)[0].resource == "variance"


@pytest.mark.parametrize(
    "path, expected",
    [
        ("/api/v1/batches/status", "batches"),
        ("/api/v1/variance/", "variance"),
        ("/api/v1", None),
        ("/docs", None),
    ],
)
def test_resource_for_path(path, expected):
    assert resource_for_path(path, "/api/v1") == expected

"""
Batch and Variance API Integration Tests
"""

from decimal import Decimal

import pytest
from httpx import AsyncClient

BATCHES = "/api/v1/batches"
VARIANCE = "/api/v1/variance"

AS_OF = "2026-01-14T12:00:00Z"


def batch_payload(**overrides) -> dict:
    """A two-trip batch from the previous days, both completed."""
    batch = {
        "id": "batch-001",
        "name": "Week 3",
        "created_at": "2026-01-10T00:00:00Z",
        "status": "IN_PROGRESS",
        "trips": [
            {
                "trip_id": "T-100",
                "scheduled_at": "2026-01-12T22:00:00Z",
                "stage": "COMPLETED",
                "projected_loads": 6,
            },
            {
                "trip_id": "T-101",
                "scheduled_at": "2026-01-13T22:00:00Z",
                "stage": "COMPLETED",
                "projected_loads": 7,
            },
        ],
    }
    batch.update(overrides)
    return batch


@pytest.mark.asyncio
async def test_status_is_derived_and_stale_flagged(client: AsyncClient):
    resp = await client.post(
        f"{BATCHES}/status",
        json={"batch": batch_payload(), "as_of": AS_OF},
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "COMPLETED"
    assert body["cached_status"] == "IN_PROGRESS"
    assert body["is_stale"] is True
    assert body["trip_count"] == 2


@pytest.mark.asyncio
async def test_status_of_empty_batch(client: AsyncClient):
    resp = await client.post(
        f"{BATCHES}/status",
        json={"batch": batch_payload(trips=[], status="EMPTY"), "as_of": AS_OF},
    )

    assert resp.status_code == 200
    assert resp.json()["status"] == "EMPTY"
    assert resp.json()["is_stale"] is False


@pytest.mark.asyncio
async def test_status_rejects_blank_name(client: AsyncClient):
    resp = await client.post(f"{BATCHES}/status", json={"batch": batch_payload(name="")})

    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_reconcile_without_invoice(client: AsyncClient):
    resp = await client.post(
        f"{BATCHES}/reconcile",
        json={"batch": batch_payload(), "as_of": AS_OF},
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "COMPLETED"
    assert body["actuals"] is None
    assert body["variance"] is None
    assert Decimal(body["projection"]["projected_total"]) == Decimal("1044.18")
    assert body["projection"]["week_ids"] == ["2026-W03"]


@pytest.mark.asyncio
async def test_reconcile_with_invoice(client: AsyncClient):
    line_items = [
        {"trip_id": "T-100", "item_type": "TOUR_COMPLETED", "gross_pay": "452.09"},
        {"trip_id": "T-101", "item_type": "TOUR_COMPLETED", "gross_pay": "452.09"},
        {"trip_id": "T-100", "load_id": "L-1", "item_type": "LOAD_COMPLETED", "gross_pay": "70"},
        {"trip_id": "T-101", "load_id": "L-2", "item_type": "LOAD_COMPLETED", "gross_pay": "70"},
    ]

    resp = await client.post(
        f"{BATCHES}/reconcile",
        json={"batch": batch_payload(), "line_items": line_items, "as_of": AS_OF},
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "INVOICED"
    assert Decimal(body["variance"]["variance"]) == Decimal("0")
    assert Decimal(body["variance"]["accuracy"]) == Decimal("100")
    assert [line["component"] for line in body["breakdown"]] == [
        "Tour Pay",
        "Accessorials",
        "Adjustments",
        "TOTAL",
    ]


@pytest.mark.asyncio
async def test_variance_with_actual(client: AsyncClient):
    resp = await client.post(f"{VARIANCE}/", json={"projected": "1000", "actual": "950"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["has_data"] is True
    assert Decimal(body["variance"]["variance_percent"]) == Decimal("-5.00")
    assert body["rating"] == "great"


@pytest.mark.asyncio
async def test_variance_without_actual(client: AsyncClient):
    resp = await client.post(f"{VARIANCE}/", json={"projected": "1000"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["has_data"] is False
    assert body["variance"] is None


@pytest.mark.asyncio
async def test_period_summary(client: AsyncClient):
    resp = await client.post(
        f"{VARIANCE}/period-summary",
        json={
            "records": [
                {"batch_id": "a", "projected": "1000", "actual": "990"},
                {"batch_id": "b", "projected": "500"},
            ]
        },
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["invoiced_count"] == 1
    assert Decimal(body["total_projected"]) == Decimal("1500")
    assert body["rating"] == "excellent"


@pytest.mark.asyncio
async def test_status_returns_refreshed_batch(client: AsyncClient):
    resp = await client.post(
        f"{BATCHES}/status",
        json={"batch": batch_payload(), "as_of": AS_OF},
    )

    batch = resp.json()["batch"]
    assert batch["id"] == "batch-001"
    assert batch["status"] == "COMPLETED"
    assert len(batch["trips"]) == 2


@pytest.mark.asyncio
async def test_variance_with_huge_amounts(client: AsyncClient):
    resp = await client.post(f"{VARIANCE}/", json={"projected": "1e27", "actual": "2e27"})

    assert resp.status_code == 200
    assert Decimal(resp.json()["variance"]["variance_percent"]) == Decimal("100")


@pytest.mark.asyncio
async def test_period_summary_for_week(client: AsyncClient):
    resp = await client.post(
        f"{VARIANCE}/period-summary",
        json={
            "week_id": "2026-W03",
            "records": [{"batch_id": "a", "projected": "1000", "actual": "1000"}],
        },
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["week_id"] == "2026-W03"
    assert body["week_start"] == "2026-01-12"


@pytest.mark.asyncio
async def test_period_summary_rejects_unknown_week(client: AsyncClient):
    resp = await client.post(
        f"{VARIANCE}/period-summary",
        json={"week_id": "2025-W53", "records": []},
    )

    assert resp.status_code == 422

"""
Batch Tracker MCP Tool

Trip batch status, invoice reconciliation and variance exposed as MCP tools.
"""

from datetime import datetime
from decimal import Decimal

from engines.schemas.batch import InvoiceLineItem, TripBatch
from engines.schemas.forecast import ForecastingConstants
from engines.services.batch_tracker import reconcile_batch, resolve_status
from engines.services.variance_calculator import compute_variance, rate_accuracy

# Use the same MCP instance as forecast_engine
from engines.tools.forecast_engine import mcp, to_json_dict


@mcp.tool()
async def compute_forecast_variance(projected: float, actual: float | None = None) -> dict:
    """
    Compare invoiced revenue against its projection.

    Args:
        projected: Projected revenue
        actual: Invoiced revenue, or null when no invoice has been imported

    Returns:
        Variance, variance percent and accuracy (0-100), or has_data=false
        when there is no actual yet
    """
    variance = compute_variance(
        Decimal(str(projected)),
        Decimal(str(actual)) if actual is not None else None,
    )
    if variance is None:
        return {"has_data": False, "projected": projected}

    return {
        "has_data": True,
        **to_json_dict(variance),
        "rating": rate_accuracy(variance.accuracy).value,
    }


@mcp.tool()
async def resolve_trip_batch_status(batch: dict, as_of: str | None = None) -> dict:
    """
    Derive a trip batch's lifecycle status.

    Args:
        batch: Trip batch with id, name, created_at, trips and optional
            invoice_imported_at
        as_of: ISO-8601 timestamp to evaluate at (defaults to now)

    Returns:
        The batch id, derived status and trip count
    """
    trip_batch = TripBatch.model_validate(batch)
    now = datetime.fromisoformat(as_of) if as_of else None
    status = resolve_status(trip_batch, now=now)
    return {
        "batch_id": trip_batch.id,
        "status": status.value,
        "trip_count": trip_batch.trip_count,
    }


@mcp.tool()
async def reconcile_trip_batch(
    batch: dict,
    line_items: list[dict] | None = None,
    dtr_rate: float = 452.09,
    trip_accessorial_rate: float = 70.0,
    as_of: str | None = None,
) -> dict:
    """
    Project a batch's revenue and compare it with its invoice lines.

    Args:
        batch: Trip batch with its trips
        line_items: Invoice lines (trip_id, item_type, gross_pay), or null
            when no invoice has been imported
        dtr_rate: Pay per projected tour
        trip_accessorial_rate: Flat accessorial per projected trip
        as_of: ISO-8601 timestamp to evaluate status at (defaults to now)

    Returns:
        Projection, invoice totals, total variance and per-component breakdown
    """
    constants = ForecastingConstants(
        dtr_rate=Decimal(str(dtr_rate)),
        trip_accessorial_rate=Decimal(str(trip_accessorial_rate)),
    )
    items = (
        [InvoiceLineItem.model_validate(item) for item in line_items]
        if line_items is not None
        else None
    )
    result = reconcile_batch(
        TripBatch.model_validate(batch),
        items,
        constants,
        now=datetime.fromisoformat(as_of) if as_of else None,
    )
    return to_json_dict(result)

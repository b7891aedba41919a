"""
Batch Tracker Service

Derives trip batch status, projects batch revenue from its trips, and
reconciles the projection against an imported invoice.
"""

import logging
from collections.abc import Iterable
from datetime import datetime, timedelta, timezone

from engines.schemas.batch import (
    BatchProjection,
    BatchStatus,
    InvoiceLineItem,
    TripBatch,
    TripRecord,
    TripStage,
)
from engines.schemas.forecast import ForecastingConstants
from engines.schemas.variance import BatchReconciliation
from engines.services.invoice_totals import summarize_invoice
from engines.services.variance_calculator import build_variance_breakdown, compute_variance
from engines.services.week_utils import week_id

logger = logging.getLogger(__name__)

# How long after its scheduled start a trip is assumed to be over
DEFAULT_TRIP_WINDOW = timedelta(hours=24)

FINISHED_STAGES = frozenset({TripStage.COMPLETED, TripStage.CANCELED})


def _is_finished(trip: TripRecord, now: datetime, trip_window: timedelta) -> bool:
    return trip.stage in FINISHED_STAGES or trip.scheduled_at + trip_window <= now


def resolve_status(
    batch: TripBatch,
    now: datetime | None = None,
    trip_window: timedelta = DEFAULT_TRIP_WINDOW,
) -> BatchStatus:
    """
    Derive a batch's status from its fields. First matching rule wins:

    1. Invoice imported -> INVOICED
    2. No trips -> EMPTY
    3. Every trip scheduled strictly after now -> UPCOMING
    4. Every trip started and each one completed, canceled or past its
       window -> COMPLETED
    5. Otherwise -> IN_PROGRESS

    The cached `batch.status` is ignored.
    """
    if now is None:
        now = datetime.now(tz=timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    if batch.invoice_imported_at is not None:
        return BatchStatus.INVOICED

    if not batch.trips:
        return BatchStatus.EMPTY

    if all(trip.scheduled_at > now for trip in batch.trips):
        return BatchStatus.UPCOMING

    if all(
        trip.scheduled_at <= now and _is_finished(trip, now, trip_window)
        for trip in batch.trips
    ):
        return BatchStatus.COMPLETED

    return BatchStatus.IN_PROGRESS


def refresh_status(
    batch: TripBatch,
    now: datetime | None = None,
    trip_window: timedelta = DEFAULT_TRIP_WINDOW,
) -> TripBatch:
    """Return a copy of the batch with its cached status re-derived."""
    status = resolve_status(batch, now=now, trip_window=trip_window)
    if status != batch.status:
        logger.debug("Batch %s status %s -> %s", batch.id, batch.status.value, status.value)
    return batch.model_copy(update={"status": status})


def project_batch(batch: TripBatch, constants: ForecastingConstants) -> BatchProjection:
    """
    Roll a batch's trips up into counts and projected revenue.

    Canceled trips count toward trip_count but are not projected. Each
    active trip earns one DTR and one flat trip accessorial.
    """
    active = [trip for trip in batch.trips if trip.stage is not TripStage.CANCELED]

    projected_tours = len(active)
    projected_tour_pay = projected_tours * constants.dtr_rate
    projected_accessorials = projected_tours * constants.trip_accessorial_rate

    return BatchProjection(
        batch_id=batch.id,
        trip_count=len(batch.trips),
        canceled_count=len(batch.trips) - projected_tours,
        completed_count=sum(1 for trip in batch.trips if trip.stage is TripStage.COMPLETED),
        projected_tours=projected_tours,
        projected_loads=sum(trip.projected_loads for trip in active),
        projected_tour_pay=projected_tour_pay,
        projected_accessorials=projected_accessorials,
        projected_total=projected_tour_pay + projected_accessorials,
        week_ids=sorted({week_id(trip.scheduled_at) for trip in batch.trips}),
    )


def reconcile_batch(
    batch: TripBatch,
    line_items: Iterable[InvoiceLineItem] | None,
    constants: ForecastingConstants,
    now: datetime | None = None,
    trip_window: timedelta = DEFAULT_TRIP_WINDOW,
) -> BatchReconciliation:
    """
    Compare a batch's projection with its invoice.

    Passing `line_items=None` means no invoice has been imported yet: the
    variance is None and the status comes from the trips alone. Passing a
    list (even an empty one) means the invoice is in, and the batch
    resolves to INVOICED.
    """
    projection = project_batch(batch, constants)

    if line_items is None:
        actuals = None
    else:
        actuals = summarize_invoice(line_items)
        if batch.invoice_imported_at is None:
            batch = batch.model_copy(
                update={"invoice_imported_at": now or datetime.now(tz=timezone.utc)}
            )

    status = resolve_status(batch, now=now, trip_window=trip_window)

    return BatchReconciliation(
        batch_id=batch.id,
        status=status,
        projection=projection,
        actuals=actuals,
        variance=compute_variance(
            projection.projected_total,
            actuals.total_pay if actuals else None,
        ),
        breakdown=build_variance_breakdown(projection, actuals),
    )

"""
Trip Batch API Routes

Stateless endpoints for batch status and invoice reconciliation. The
caller supplies the batch; nothing is persisted here.
"""

import logging

from fastapi import APIRouter, Depends

from backend.config import Settings, get_settings
from backend.schemas.forecast import (
    BatchReconcileRequest,
    BatchStatusRequest,
    BatchStatusResponse,
)
from engines.schemas.variance import BatchReconciliation
from engines.services.batch_tracker import reconcile_batch, refresh_status

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/status",
    response_model=BatchStatusResponse,
    summary="Resolve batch status",
    description="Derive a batch's lifecycle status from its trips and invoice state.",
)
async def get_batch_status(
    request: BatchStatusRequest,
    settings: Settings = Depends(get_settings),
) -> BatchStatusResponse:
    batch = request.batch
    refreshed = refresh_status(batch, now=request.as_of, trip_window=settings.trip_window)
    derived = refreshed.status

    if derived != batch.status:
        logger.info(
            "Batch %s cached status %s is stale, derived %s",
            batch.id,
            batch.status.value,
            derived.value,
        )

    return BatchStatusResponse(
        batch_id=batch.id,
        status=derived,
        cached_status=batch.status,
        is_stale=derived != batch.status,
        trip_count=batch.trip_count,
        batch=refreshed,
    )


@router.post(
    "/reconcile",
    response_model=BatchReconciliation,
    summary="Reconcile batch with invoice",
    description=(
        "Project the batch's revenue from its trips and compare it with the "
        "imported invoice lines, if any."
    ),
)
async def reconcile_trip_batch(
    request: BatchReconcileRequest,
    settings: Settings = Depends(get_settings),
) -> BatchReconciliation:
    return reconcile_batch(
        request.batch,
        request.line_items,
        settings.forecasting_constants(),
        now=request.as_of,
        trip_window=settings.trip_window,
    )

"""
Forecast and batch API schemas.

Request/response wrappers around the engine models.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from engines.schemas.batch import BatchStatus, InvoiceLineItem, TripBatch
from engines.schemas.forecast import ForecastInput
from engines.schemas.variance import AccuracyRating, PeriodRecord, Variance
from engines.services.forecast_calculator import DEFAULT_SCALING_TRUCK_COUNTS
from engines.services.week_utils import week_start_from_id


class ScalingTableRequest(BaseModel):
    """Request body for the truck-count scaling table."""

    base_input: ForecastInput
    truck_counts: list[int] = Field(
        default_factory=lambda: list(DEFAULT_SCALING_TRUCK_COUNTS),
        description="Fleet sizes to compute, in output order",
    )


class BatchStatusRequest(BaseModel):
    """Request body for deriving a batch's status."""

    batch: TripBatch
    as_of: datetime | None = Field(default=None, description="Evaluate at this time (default now)")


class BatchStatusResponse(BaseModel):
    """Derived status for one batch."""

    batch_id: str
    status: BatchStatus
    cached_status: BatchStatus
    is_stale: bool = Field(..., description="True when the cached status differs from the derived one")
    trip_count: int
    batch: TripBatch = Field(..., description="The batch with its cached status refreshed")


class BatchReconcileRequest(BaseModel):
    """Request body for reconciling a batch with its invoice."""

    batch: TripBatch
    line_items: list[InvoiceLineItem] | None = Field(
        default=None,
        description="Invoice lines; omit when no invoice has been imported",
    )
    as_of: datetime | None = None


class VarianceRequest(BaseModel):
    """Request body for a single forecast-vs-actual comparison."""

    projected: Decimal
    actual: Decimal | None = None


class VarianceResponse(BaseModel):
    """Variance result; `variance` is null when there is no actual yet."""

    has_data: bool
    variance: Variance | None = None
    rating: AccuracyRating | None = None


class PeriodSummaryRequest(BaseModel):
    """Request body for a period accuracy summary."""

    records: list[PeriodRecord]
    week_id: str | None = Field(default=None, description="Label the summary with this ISO week")

    @field_validator("week_id")
    @classmethod
    def _week_id_exists(cls, value: str | None) -> str | None:
        if value is not None:
            week_start_from_id(value)
        return value

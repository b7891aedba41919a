"""
Trip Batch Schemas

Models for trip batches, their trips, imported invoice lines and the
projections derived from them.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


class BatchStatus(str, Enum):
    """Derived lifecycle state of a trip batch."""

    EMPTY = "EMPTY"
    UPCOMING = "UPCOMING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    INVOICED = "INVOICED"


class TripStage(str, Enum):
    """Stage of a single trip as reported by the load board."""

    UPCOMING = "UPCOMING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELED = "CANCELED"


class InvoiceItemType(str, Enum):
    """Line item categories on a carrier invoice."""

    TOUR_COMPLETED = "TOUR_COMPLETED"
    LOAD_COMPLETED = "LOAD_COMPLETED"
    ADJUSTMENT_DISPUTE = "ADJUSTMENT_DISPUTE"
    ADJUSTMENT_OTHER = "ADJUSTMENT_OTHER"


def _assume_utc(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class TripRecord(BaseModel):
    """A scheduled trip belonging to a batch."""

    trip_id: str = Field(..., description="Load board trip identifier")
    scheduled_at: datetime = Field(..., description="Scheduled start; naive values are UTC")
    stage: TripStage = Field(default=TripStage.UPCOMING)
    projected_loads: int = Field(default=0, ge=0)
    actual_loads: int | None = Field(default=None, ge=0)

    @field_validator("scheduled_at")
    @classmethod
    def _scheduled_at_utc(cls, value: datetime) -> datetime:
        return _assume_utc(value)


class TripBatch(BaseModel):
    """
    A named collection of trips for a tracked period.

    `status` is the cached value last written by the caller; the source of
    truth is `resolve_status`.
    """

    id: str
    name: str = Field(..., min_length=1)
    description: str | None = None
    created_at: datetime
    status: BatchStatus = Field(default=BatchStatus.EMPTY)
    invoice_imported_at: datetime | None = None
    trips_imported_at: datetime | None = None
    trips: list[TripRecord] = Field(default_factory=list)

    @field_validator("created_at", "invoice_imported_at", "trips_imported_at")
    @classmethod
    def _timestamps_utc(cls, value: datetime | None) -> datetime | None:
        return _assume_utc(value)

    @computed_field
    @property
    def trip_count(self) -> int:
        return len(self.trips)


class BatchProjection(BaseModel):
    """Counts and projected revenue rolled up from a batch's trips."""

    model_config = ConfigDict(frozen=True)

    batch_id: str
    trip_count: int
    canceled_count: int
    completed_count: int

    projected_tours: int = Field(..., description="Active (non-canceled) trips")
    projected_loads: int
    projected_tour_pay: Decimal
    projected_accessorials: Decimal
    projected_total: Decimal

    week_ids: list[str] = Field(
        default_factory=list,
        description="ISO weeks spanned by the batch's trips, ascending",
    )


class InvoiceLineItem(BaseModel):
    """One validated row from an imported carrier invoice."""

    trip_id: str
    load_id: str | None = None
    item_type: InvoiceItemType
    start_date: date | None = None
    gross_pay: Decimal = Field(default=Decimal("0"))


class InvoiceTotals(BaseModel):
    """Actual pay summed from invoice line items."""

    model_config = ConfigDict(frozen=True)

    total_tour_pay: Decimal
    total_accessorials: Decimal
    total_adjustments: Decimal
    total_pay: Decimal
    tour_count: int
    load_count: int

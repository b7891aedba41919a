"""
Variance Schemas

Forecast-vs-actual comparison models.
"""

from datetime import date
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from engines.schemas.batch import BatchProjection, BatchStatus, InvoiceTotals


class AccuracyRating(str, Enum):
    """Display bucket for an accuracy score."""

    EXCELLENT = "excellent"
    GREAT = "great"
    GOOD = "good"
    NEEDS_ATTENTION = "needs_attention"


class Variance(BaseModel):
    """
    Actual minus projected for one figure.

    Percentages are plain numbers: 12.5 means 12.5%.
    """

    model_config = ConfigDict(frozen=True)

    projected: Decimal
    actual: Decimal
    variance: Decimal = Field(..., description="actual - projected (signed)")
    variance_percent: Decimal = Field(
        ...,
        description="variance / projected * 100, or 0 when projected is not positive",
    )
    accuracy: Decimal = Field(..., ge=0, le=100, description="100 = perfect match")


class VarianceBreakdownLine(BaseModel):
    """One component of a batch's forecast-vs-actual breakdown."""

    model_config = ConfigDict(frozen=True)

    component: str
    projected: Decimal
    actual: Decimal | None = None
    variance: Variance | None = Field(
        default=None,
        description="None until actuals exist",
    )


class BatchReconciliation(BaseModel):
    """Projection, invoiced actuals and their comparison for one batch."""

    batch_id: str
    status: BatchStatus
    projection: BatchProjection
    actuals: InvoiceTotals | None = None
    variance: Variance | None = None
    breakdown: list[VarianceBreakdownLine] = Field(default_factory=list)


class PeriodRecord(BaseModel):
    """Projected and (optional) actual totals for one batch in a period."""

    batch_id: str
    projected: Decimal
    actual: Decimal | None = None


class PeriodSummary(BaseModel):
    """Forecast accuracy rolled up over a reporting period."""

    week_id: str | None = Field(default=None, description="Reporting week, e.g. 2026-W03")
    week_start: date | None = Field(default=None, description="Monday that starts the reporting week")
    batch_count: int
    invoiced_count: int
    total_projected: Decimal = Field(..., description="Projected total across every batch")
    invoiced_projected: Decimal = Field(..., description="Projected total of invoiced batches")
    total_actual: Decimal
    variance: Variance | None = Field(
        default=None,
        description="Invoiced batches only; None when nothing is invoiced",
    )
    rating: AccuracyRating | None = None

"""
Variance Calculator

Compares projected revenue with invoiced actuals and scores forecast
accuracy.
"""

from collections.abc import Iterable
from decimal import Decimal

from engines.schemas.batch import BatchProjection, InvoiceTotals
from engines.schemas.variance import (
    AccuracyRating,
    PeriodRecord,
    PeriodSummary,
    Variance,
    VarianceBreakdownLine,
)
from engines.services.rounding import round_half_up
from engines.services.week_utils import week_start_from_id

HUNDRED = Decimal("100")

# Lower bounds for each rating, checked in order
ACCURACY_THRESHOLDS: tuple[tuple[Decimal, AccuracyRating], ...] = (
    (Decimal("98"), AccuracyRating.EXCELLENT),
    (Decimal("95"), AccuracyRating.GREAT),
    (Decimal("90"), AccuracyRating.GOOD),
)


def _to_decimal(value: Decimal | int | float | str) -> Decimal:
    result = value if isinstance(value, Decimal) else Decimal(str(value))
    if not result.is_finite():
        raise ValueError(f"Expected a finite amount, got {value!r}")
    return result


def compute_variance(
    projected: Decimal | int | float | str,
    actual: Decimal | int | float | str | None,
) -> Variance | None:
    """
    Compare an actual figure against its projection.

    Returns None while no actual exists; callers show that as "no data",
    never as a zero variance.

    variance_percent is 0 when projected is not positive. Accuracy is
    100 - |variance_percent| floored at 0, so it always lies in [0, 100].
    """
    if actual is None:
        return None

    projected_value = _to_decimal(projected)
    actual_value = _to_decimal(actual)
    variance = actual_value - projected_value

    if projected_value > 0:
        variance_percent = round_half_up(variance / projected_value * HUNDRED)
    else:
        variance_percent = Decimal("0.00")

    accuracy = min(HUNDRED, max(Decimal("0"), HUNDRED - abs(variance_percent)))

    return Variance(
        projected=projected_value,
        actual=actual_value,
        variance=round_half_up(variance),
        variance_percent=variance_percent,
        accuracy=accuracy,
    )


def rate_accuracy(accuracy: Decimal | int | float | str) -> AccuracyRating:
    """Bucket an accuracy score for display."""
    value = _to_decimal(accuracy)
    for threshold, rating in ACCURACY_THRESHOLDS:
        if value >= threshold:
            return rating
    return AccuracyRating.NEEDS_ATTENTION


def build_variance_breakdown(
    projection: BatchProjection,
    actuals: InvoiceTotals | None,
) -> list[VarianceBreakdownLine]:
    """
    Compare a batch projection with invoice totals component by component.

    Adjustments are never forecast, so their projection is 0.
    """
    components = [
        ("Tour Pay", projection.projected_tour_pay, actuals.total_tour_pay if actuals else None),
        (
            "Accessorials",
            projection.projected_accessorials,
            actuals.total_accessorials if actuals else None,
        ),
        ("Adjustments", Decimal("0"), actuals.total_adjustments if actuals else None),
        ("TOTAL", projection.projected_total, actuals.total_pay if actuals else None),
    ]

    return [
        VarianceBreakdownLine(
            component=component,
            projected=projected,
            actual=actual,
            variance=compute_variance(projected, actual),
        )
        for component, projected, actual in components
    ]


def summarize_period(
    records: Iterable[PeriodRecord],
    week_id: str | None = None,
) -> PeriodSummary:
    """
    Roll batch-level projections and actuals up to a reporting period.

    When the period is a week, `week_id` labels the summary and its start
    date is resolved from it.

    The variance compares only batches that have been invoiced, so open
    batches do not show up as missed revenue.
    """
    records = list(records)
    invoiced = [record for record in records if record.actual is not None]

    total_projected = sum((record.projected for record in records), Decimal("0"))
    invoiced_projected = sum((record.projected for record in invoiced), Decimal("0"))
    total_actual = sum((record.actual for record in invoiced), Decimal("0"))

    variance = compute_variance(invoiced_projected, total_actual) if invoiced else None

    return PeriodSummary(
        week_id=week_id,
        week_start=week_start_from_id(week_id) if week_id else None,
        batch_count=len(records),
        invoiced_count=len(invoiced),
        total_projected=total_projected,
        invoiced_projected=invoiced_projected,
        total_actual=total_actual,
        variance=variance,
        rating=rate_accuracy(variance.accuracy) if variance else None,
    )

"""
Variance API Routes

Forecast-vs-actual comparison and period accuracy summaries.
"""

from fastapi import APIRouter

from backend.schemas.forecast import PeriodSummaryRequest, VarianceRequest, VarianceResponse
from engines.schemas.variance import PeriodSummary
from engines.services.variance_calculator import compute_variance, rate_accuracy, summarize_period

router = APIRouter()


@router.post(
    "/",
    response_model=VarianceResponse,
    summary="Compute variance",
    description="Compare an actual total with its projection. No actual means no data.",
)
async def get_variance(request: VarianceRequest) -> VarianceResponse:
    variance = compute_variance(request.projected, request.actual)
    if variance is None:
        return VarianceResponse(has_data=False)
    return VarianceResponse(
        has_data=True,
        variance=variance,
        rating=rate_accuracy(variance.accuracy),
    )


@router.post(
    "/period-summary",
    response_model=PeriodSummary,
    summary="Period accuracy summary",
    description="Roll batch projections and invoiced actuals up to one period.",
)
async def get_period_summary(request: PeriodSummaryRequest) -> PeriodSummary:
    return summarize_period(request.records, week_id=request.week_id)

"""
Forecast API Routes

Stateless endpoints for the weekly forecast calculator.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from backend.config import Settings, get_settings
from backend.schemas.forecast import ScalingTableRequest
from engines.schemas.forecast import ForecastInput, ForecastResult, ScalingTableRow
from engines.services.forecast_calculator import (
    ForecastValidationError,
    calculate_forecast,
    generate_scaling_table,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def validation_error_to_http(exc: ForecastValidationError) -> HTTPException:
    """Map an engine validation failure to a 422 naming the field."""
    logger.warning("Rejected forecast input: %s", exc)
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail={"field": exc.field, "message": exc.message},
    )


@router.get(
    "/defaults",
    response_model=ForecastInput,
    summary="Default assumptions",
    description="Forecast assumptions used to prefill the calculator.",
)
async def get_default_assumptions(
    settings: Settings = Depends(get_settings),
) -> ForecastInput:
    return settings.default_forecast_input()


@router.post(
    "/calculate",
    response_model=ForecastResult,
    summary="Calculate weekly forecast",
    description="Project one week of revenue, cost and profit from operating assumptions.",
)
async def calculate_weekly_forecast(request: ForecastInput) -> ForecastResult:
    try:
        return calculate_forecast(request)
    except ForecastValidationError as exc:
        raise validation_error_to_http(exc) from exc


@router.post(
    "/scaling-table",
    response_model=list[ScalingTableRow],
    summary="Truck scaling table",
    description="Forecast the same assumptions at several fleet sizes.",
)
async def get_scaling_table(request: ScalingTableRequest) -> list[ScalingTableRow]:
    try:
        return generate_scaling_table(request.base_input, request.truck_counts)
    except ForecastValidationError as exc:
        raise validation_error_to_http(exc) from exc

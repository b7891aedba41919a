"""
Forecast Calculator

Pure calculation logic for the weekly revenue/cost/profit forecast and
the truck-count scaling table.
"""

from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ValidationError

from engines.schemas.forecast import ForecastInput, ForecastResult, ScalingTableRow
from engines.services.rounding import round_half_up

# Weekly hours before overtime applies (strictly greater than)
OVERTIME_THRESHOLD_HOURS = Decimal("40")

DEFAULT_SCALING_TRUCK_COUNTS: tuple[int, ...] = (2, 4, 6, 8, 10)

class ForecastValidationError(ValueError):
    """Raised when a forecast input violates a field constraint."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


def validate_forecast_input(input_data: ForecastInput | Mapping[str, Any]) -> ForecastInput:
    """
    Validate assumptions before any arithmetic happens.

    Model instances are dumped and re-validated so that values built with
    `model_construct` or `model_copy(update=...)` cannot skip the checks.
    """
    raw = input_data.model_dump() if isinstance(input_data, BaseModel) else input_data
    try:
        return ForecastInput.model_validate(raw)
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or "input"
        raise ForecastValidationError(field, first["msg"]) from exc


def calculate_forecast(input_data: ForecastInput | Mapping[str, Any]) -> ForecastResult:
    """
    Project one week of revenue, cost and profit.

    Algorithm:
    1. weekly_tours = trucks x nights x tours per truck
    2. weekly_loads = round(weekly_tours x avg loads per tour), half-up
    3. Revenue = tours x DTR + loads x accessorial rate
    4. Labor accumulated truck by truck, with overtime above 40 hours
       when enabled
    5. Payroll tax and workers comp as fractions of labor
    6. Cost = labor + tax + comp + overhead (overhead always applies)
    7. Profit = revenue - cost (no floor)
    8. Contribution margin = profit per truck per night, 0 when either
       count is 0
    9. Round each returned currency field to cents

    Raises:
        ForecastValidationError: if any field is out of range.
    """
    data = validate_forecast_input(input_data)

    # Steps 1-3: volume and revenue
    weekly_tours = data.truck_count * data.nights_per_week * data.tours_per_truck
    weekly_loads = int(round_half_up(weekly_tours * data.avg_loads_per_tour, Decimal("1")))

    tour_pay = weekly_tours * data.dtr_rate
    accessorial_pay = weekly_loads * data.avg_accessorial_rate
    weekly_revenue = tour_pay + accessorial_pay

    # Step 4: labor is summed per truck so hours can later differ by truck
    labor_cost = Decimal("0")
    for _truck in range(data.truck_count):
        driver_hours = data.nights_per_week * data.hours_per_night

        if data.include_overtime and driver_hours > OVERTIME_THRESHOLD_HOURS:
            regular_pay = OVERTIME_THRESHOLD_HOURS * data.hourly_wage
            overtime_pay = (
                (driver_hours - OVERTIME_THRESHOLD_HOURS)
                * data.hourly_wage
                * data.overtime_multiplier
            )
            labor_cost += regular_pay + overtime_pay
        else:
            labor_cost += driver_hours * data.hourly_wage

    # Steps 5-7: burden, cost, profit
    payroll_tax = labor_cost * data.payroll_tax_rate
    workers_comp = labor_cost * data.workers_comp_rate
    weekly_cost = labor_cost + payroll_tax + workers_comp + data.weekly_overhead
    weekly_profit = weekly_revenue - weekly_cost

    # Step 8: divide-by-zero falls back to exactly 0
    if data.truck_count > 0 and data.nights_per_week > 0:
        contribution_margin = weekly_profit / data.truck_count / data.nights_per_week
    else:
        contribution_margin = Decimal("0")

    # Step 9: round returned fields only
    return ForecastResult(
        weekly_tours=weekly_tours,
        weekly_loads=weekly_loads,
        tour_pay=round_half_up(tour_pay),
        accessorial_pay=round_half_up(accessorial_pay),
        weekly_revenue=round_half_up(weekly_revenue),
        labor_cost=round_half_up(labor_cost),
        payroll_tax=round_half_up(payroll_tax),
        workers_comp=round_half_up(workers_comp),
        overhead=round_half_up(data.weekly_overhead),
        weekly_cost=round_half_up(weekly_cost),
        weekly_profit=round_half_up(weekly_profit),
        contribution_margin=round_half_up(contribution_margin),
    )


def generate_scaling_table(
    base_input: ForecastInput | Mapping[str, Any],
    truck_counts: Iterable[int] = DEFAULT_SCALING_TRUCK_COUNTS,
) -> list[ScalingTableRow]:
    """
    Forecast the same assumptions at several fleet sizes.

    Output order follows `truck_counts`; repeated counts are computed and
    returned again.
    """
    base = validate_forecast_input(base_input)

    rows: list[ScalingTableRow] = []
    for trucks in truck_counts:
        result = calculate_forecast(base.model_copy(update={"truck_count": trucks}))
        rows.append(ScalingTableRow(**result.model_dump(), trucks=trucks))
    return rows

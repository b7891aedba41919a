"""
Forecast Engine Schemas

Input/output models for the weekly revenue, cost and profit forecast.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

# Upper bounds for currency inputs
MAX_RATE = Decimal("1000000")
MAX_OVERHEAD = Decimal("1000000000")


class ForecastingConstants(BaseModel):
    """
    Contract rates used to project batch revenue from imported trips.

    Passed explicitly to the services that need it; built from settings
    by the API and MCP layers.
    """

    model_config = ConfigDict(frozen=True)

    dtr_rate: Decimal = Field(
        default=Decimal("452.09"),
        ge=0,
        le=MAX_RATE,
        description="Daily Trip Rate: base pay per completed tour",
    )
    trip_accessorial_rate: Decimal = Field(
        default=Decimal("70"),
        ge=0,
        le=MAX_RATE,
        description="Flat accessorial payout per trip ID (not per load)",
    )


class ForecastInput(BaseModel):
    """
    Operating assumptions for one projected week.

    Every field is required. A single invalid field rejects the whole input.
    """

    model_config = ConfigDict(frozen=True)

    # Fleet and schedule
    truck_count: int = Field(..., ge=0, le=10_000, description="Trucks running each night")
    nights_per_week: int = Field(..., ge=0, le=7, description="Nights worked per week")
    tours_per_truck: Decimal = Field(..., ge=0, le=24, description="Tours per truck per night")
    avg_loads_per_tour: Decimal = Field(..., ge=0, le=1_000, description="Average loads (stops) per tour")

    # Revenue rates
    dtr_rate: Decimal = Field(..., ge=0, le=MAX_RATE, description="Pay per completed tour")
    avg_accessorial_rate: Decimal = Field(..., ge=0, le=MAX_RATE, description="Pay per completed load")

    # Labor
    hourly_wage: Decimal = Field(..., ge=0, le=10_000, description="Driver hourly wage")
    hours_per_night: Decimal = Field(..., ge=0, le=24, description="Driver hours per shift")
    include_overtime: bool = Field(..., description="Apply overtime above 40 hours/week")
    overtime_multiplier: Decimal = Field(..., ge=1, le=10, description="Overtime pay multiplier (e.g. 1.5)")
    payroll_tax_rate: Decimal = Field(..., ge=0, le=1, description="Payroll tax as a fraction of labor")
    workers_comp_rate: Decimal = Field(..., ge=0, le=1, description="Workers comp as a fraction of labor")

    # Fixed costs
    weekly_overhead: Decimal = Field(..., ge=0, le=MAX_OVERHEAD, description="Fixed weekly overhead")


class ForecastResult(BaseModel):
    """
    Projected weekly breakdown.

    Currency fields are rounded to cents (half away from zero). Only the
    returned values are rounded; intermediate arithmetic is exact.
    """

    model_config = ConfigDict(frozen=True)

    weekly_tours: Decimal = Field(..., description="Tours per week (unrounded)")
    weekly_loads: int = Field(..., description="Loads per week, rounded half-up")

    # Revenue
    tour_pay: Decimal
    accessorial_pay: Decimal
    weekly_revenue: Decimal

    # Cost
    labor_cost: Decimal
    payroll_tax: Decimal
    workers_comp: Decimal
    overhead: Decimal
    weekly_cost: Decimal

    # Bottom line
    weekly_profit: Decimal = Field(..., description="Revenue minus cost; may be negative")
    contribution_margin: Decimal = Field(
        ...,
        description="Profit per truck per night (0 when there are no trucks or nights)",
    )


class ScalingTableRow(ForecastResult):
    """A forecast tagged with the truck count it was computed for."""

    trucks: int

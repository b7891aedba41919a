"""
Forecast Engine MCP Tool

Weekly forecast and truck-count scaling table exposed as MCP tools.
"""

from decimal import Decimal
from typing import Any

from fastmcp import FastMCP
from pydantic import BaseModel

from engines.services.forecast_calculator import (
    DEFAULT_SCALING_TRUCK_COUNTS,
    calculate_forecast,
    generate_scaling_table,
)

# Initialize MCP server (will be started from server.py)
mcp = FastMCP(
    "Fleet Ledger Forecasting Engines",
    instructions=(
        "Weekly revenue/cost/profit forecasting for a trucking operation, "
        "trip batch status, and forecast-vs-invoice variance."
    ),
)


def to_json_dict(model: BaseModel) -> dict[str, Any]:
    """Dump a model with Decimal values converted to float for JSON."""

    def convert(value: Any) -> Any:
        if isinstance(value, Decimal):
            return float(value)
        if isinstance(value, dict):
            return {key: convert(item) for key, item in value.items()}
        if isinstance(value, list):
            return [convert(item) for item in value]
        return value

    return convert(model.model_dump(mode="python"))


def _build_input(
    truck_count: int,
    nights_per_week: int,
    tours_per_truck: float,
    avg_loads_per_tour: float,
    dtr_rate: float,
    avg_accessorial_rate: float,
    hourly_wage: float,
    hours_per_night: float,
    include_overtime: bool,
    overtime_multiplier: float,
    payroll_tax_rate: float,
    workers_comp_rate: float,
    weekly_overhead: float,
) -> dict[str, Any]:
    # Convert floats to Decimal for precision
    return {
        "truck_count": truck_count,
        "nights_per_week": nights_per_week,
        "tours_per_truck": Decimal(str(tours_per_truck)),
        "avg_loads_per_tour": Decimal(str(avg_loads_per_tour)),
        "dtr_rate": Decimal(str(dtr_rate)),
        "avg_accessorial_rate": Decimal(str(avg_accessorial_rate)),
        "hourly_wage": Decimal(str(hourly_wage)),
        "hours_per_night": Decimal(str(hours_per_night)),
        "include_overtime": include_overtime,
        "overtime_multiplier": Decimal(str(overtime_multiplier)),
        "payroll_tax_rate": Decimal(str(payroll_tax_rate)),
        "workers_comp_rate": Decimal(str(workers_comp_rate)),
        "weekly_overhead": Decimal(str(weekly_overhead)),
    }


@mcp.tool()
async def calculate_weekly_forecast(
    truck_count: int,
    nights_per_week: int,
    tours_per_truck: float,
    avg_loads_per_tour: float,
    dtr_rate: float,
    avg_accessorial_rate: float,
    hourly_wage: float,
    hours_per_night: float,
    include_overtime: bool,
    overtime_multiplier: float,
    payroll_tax_rate: float,
    workers_comp_rate: float,
    weekly_overhead: float,
) -> dict:
    """
    Project one week of revenue, cost and profit for the fleet.

    Revenue is tours x DTR plus loads x accessorial rate. Labor is summed
    per truck with overtime above 40 hours/week when enabled; payroll tax
    and workers comp are fractions of labor; overhead is a fixed weekly
    cost.

    Args:
        truck_count: Trucks running each night
        nights_per_week: Nights worked per week (0-7)
        tours_per_truck: Tours per truck per night
        avg_loads_per_tour: Average loads per tour
        dtr_rate: Pay per completed tour
        avg_accessorial_rate: Pay per completed load
        hourly_wage: Driver hourly wage
        hours_per_night: Driver hours per shift
        include_overtime: Apply overtime above 40 hours
        overtime_multiplier: Overtime multiplier (>= 1)
        payroll_tax_rate: Payroll tax fraction (0-1)
        workers_comp_rate: Workers comp fraction (0-1)
        weekly_overhead: Fixed weekly overhead

    Returns:
        Dictionary with the weekly breakdown

    Example:
        4 trucks x 5 nights x 1 tour at $452.09 DTR = $9,041.80 tour pay;
        130 loads x $34.12 = $4,435.60 accessorials.
    """
    input_data = _build_input(
        truck_count,
        nights_per_week,
        tours_per_truck,
        avg_loads_per_tour,
        dtr_rate,
        avg_accessorial_rate,
        hourly_wage,
        hours_per_night,
        include_overtime,
        overtime_multiplier,
        payroll_tax_rate,
        workers_comp_rate,
        weekly_overhead,
    )
    return to_json_dict(calculate_forecast(input_data))


@mcp.tool()
async def generate_truck_scaling_table(
    nights_per_week: int,
    tours_per_truck: float,
    avg_loads_per_tour: float,
    dtr_rate: float,
    avg_accessorial_rate: float,
    hourly_wage: float,
    hours_per_night: float,
    include_overtime: bool,
    overtime_multiplier: float,
    payroll_tax_rate: float,
    workers_comp_rate: float,
    weekly_overhead: float,
    truck_counts: list[int] | None = None,
) -> list[dict]:
    """
    Forecast the same assumptions at several fleet sizes.

    Args:
        truck_counts: Fleet sizes to compute, in output order (default 2, 4, 6, 8, 10)
        (remaining arguments as for calculate_weekly_forecast)

    Returns:
        One forecast per truck count, each tagged with "trucks"
    """
    base = _build_input(
        0,
        nights_per_week,
        tours_per_truck,
        avg_loads_per_tour,
        dtr_rate,
        avg_accessorial_rate,
        hourly_wage,
        hours_per_night,
        include_overtime,
        overtime_multiplier,
        payroll_tax_rate,
        workers_comp_rate,
        weekly_overhead,
    )
    counts = truck_counts if truck_counts is not None else DEFAULT_SCALING_TRUCK_COUNTS
    return [to_json_dict(row) for row in generate_scaling_table(base, counts)]

"""
Fleet Ledger Configuration

Environment-based settings for the forecasting API.
"""

from datetime import timedelta
from decimal import Decimal
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from engines.schemas.forecast import ForecastingConstants, ForecastInput


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Fleet Ledger"
    app_version: str = "0.1.0"
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    # API
    api_v1_prefix: str = "/api/v1"
    allowed_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])

    # Contract rates used for batch projections
    dtr_rate: Decimal = Field(default=Decimal("452.09"), ge=0)
    trip_accessorial_rate: Decimal = Field(default=Decimal("70"), ge=0)

    # Batch lifecycle
    trip_window_hours: int = Field(
        default=24,
        ge=0,
        description="Hours after its scheduled start that a trip counts as finished",
    )

    # Default forecast assumptions
    default_truck_count: int = 2
    default_nights_per_week: int = 7
    default_tours_per_truck: Decimal = Decimal("1")
    default_avg_loads_per_tour: Decimal = Decimal("4")
    default_dtr_rate: Decimal = Decimal("452")
    default_avg_accessorial_rate: Decimal = Decimal("77")
    default_hourly_wage: Decimal = Decimal("20")
    default_hours_per_night: Decimal = Decimal("10")
    default_include_overtime: bool = False
    default_overtime_multiplier: Decimal = Decimal("1.5")
    default_payroll_tax_rate: Decimal = Decimal("0.0765")
    default_workers_comp_rate: Decimal = Decimal("0.05")
    default_weekly_overhead: Decimal = Decimal("0")

    # Error Monitoring
    sentry_dsn: str = Field(
        default="",
        description="Sentry DSN for error monitoring (leave empty to disable)",
    )

    @property
    def trip_window(self) -> timedelta:
        return timedelta(hours=self.trip_window_hours)

    def forecasting_constants(self) -> ForecastingConstants:
        """Contract rates to inject into batch projections."""
        return ForecastingConstants(
            dtr_rate=self.dtr_rate,
            trip_accessorial_rate=self.trip_accessorial_rate,
        )

    def default_forecast_input(self) -> ForecastInput:
        """Forecast assumptions used to prefill the calculator."""
        return ForecastInput(
            truck_count=self.default_truck_count,
            nights_per_week=self.default_nights_per_week,
            tours_per_truck=self.default_tours_per_truck,
            avg_loads_per_tour=self.default_avg_loads_per_tour,
            dtr_rate=self.default_dtr_rate,
            avg_accessorial_rate=self.default_avg_accessorial_rate,
            hourly_wage=self.default_hourly_wage,
            hours_per_night=self.default_hours_per_night,
            include_overtime=self.default_include_overtime,
            overtime_multiplier=self.default_overtime_multiplier,
            payroll_tax_rate=self.default_payroll_tax_rate,
            workers_comp_rate=self.default_workers_comp_rate,
            weekly_overhead=self.default_weekly_overhead,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

"""
Settings Unit Tests
"""

from datetime import timedelta
from decimal import Decimal

from backend.config import Settings, get_settings
from engines.services.forecast_calculator import calculate_forecast


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.app_name == "Fleet Ledger"
    assert settings.trip_window == timedelta(hours=24)
    assert settings.forecasting_constants().dtr_rate == Decimal("452.09")
    assert settings.forecasting_constants().trip_accessorial_rate == Decimal("70")


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("DTR_RATE", "475.50")
    monkeypatch.setenv("TRIP_WINDOW_HOURS", "12")

    settings = Settings(_env_file=None)

    assert settings.forecasting_constants().dtr_rate == Decimal("475.50")
    assert settings.trip_window == timedelta(hours=12)


def test_default_forecast_input_is_valid():
    defaults = Settings(_env_file=None).default_forecast_input()

    assert defaults.truck_count == 2
    assert defaults.nights_per_week == 7
    assert defaults.include_overtime is False

    result = calculate_forecast(defaults)
    # 2 trucks x 7 nights x $452
    assert result.tour_pay == Decimal("6328.00")


def test_get_settings_is_cached():
    assert get_settings() is get_settings()

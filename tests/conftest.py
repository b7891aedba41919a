"""
Test Configuration and Fixtures

Provides the async API test client and shared forecasting fixtures.
"""

from collections.abc import AsyncGenerator
from datetime import datetime, timezone
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from backend.main import app
from engines.schemas.forecast import ForecastingConstants, ForecastInput
from tests.factories import make_forecast_input


@pytest_asyncio.fixture(scope="function")
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Provide an async test client bound to the ASGI app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def example_input() -> ForecastInput:
    """Four trucks, five nights, 6.5 loads per tour, overtime enabled."""
    return make_forecast_input()


@pytest.fixture
def constants() -> ForecastingConstants:
    return ForecastingConstants(dtr_rate=Decimal("452.09"), trip_accessorial_rate=Decimal("70"))


@pytest.fixture
def now() -> datetime:
    """Fixed evaluation time: Wednesday 2026-01-14 12:00 UTC."""
    return datetime(2026, 1, 14, 12, 0, tzinfo=timezone.utc)

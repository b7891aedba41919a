"""
Fleet Ledger - Main Application Entry Point

Forecasting, trip batch lifecycle and variance API for a trucking operation.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.config import get_settings
from backend.middleware.audit_log import AuditLogMiddleware
from backend.routers.v1 import batches, forecasts, variance

settings = get_settings()

logging.basicConfig(level=settings.log_level)

# Initialize Sentry for error monitoring
if settings.sentry_dsn:
    import sentry_sdk
    from sentry_sdk.integrations.fastapi import FastApiIntegration

    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.environment,
        release=f"fleet-ledger@{settings.app_version}",
        traces_sample_rate=0.1 if settings.environment == "production" else 1.0,
        integrations=[FastApiIntegration()],
    )


app = FastAPI(
    title=settings.app_name,
    description=(
        "Weekly revenue/cost forecasting, trip batch status and "
        "forecast-vs-invoice variance for a delivery fleet."
    ),
    version=settings.app_version,
    docs_url="/api/docs" if settings.debug else None,
    redoc_url="/api/redoc" if settings.debug else None,
    openapi_url="/api/openapi.json" if settings.debug else None,
)

# Audit logging middleware
app.add_middleware(AuditLogMiddleware)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Health check endpoints
@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, str]:
    """Basic health check endpoint."""
    return {"status": "healthy", "service": "fleet-ledger-api"}


@app.get("/health/ready", tags=["Health"])
async def readiness_check() -> dict[str, str]:
    """Readiness check; the service has no external dependencies."""
    return {
        "status": "ready",
        "service": "fleet-ledger-api",
        "version": settings.app_version,
        "environment": settings.environment,
    }


# API v1 routes
app.include_router(
    forecasts.router,
    prefix=f"{settings.api_v1_prefix}/forecasts",
    tags=["Forecasts"],
)
app.include_router(
    batches.router,
    prefix=f"{settings.api_v1_prefix}/batches",
    tags=["Batches"],
)
app.include_router(
    variance.router,
    prefix=f"{settings.api_v1_prefix}/variance",
    tags=["Variance"],
)

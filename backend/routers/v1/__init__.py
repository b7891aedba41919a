"""API v1 Route modules."""

from backend.routers.v1 import batches, forecasts, variance

__all__ = ["batches", "forecasts", "variance"]

"""Pydantic API Schemas for Fleet Ledger."""

from backend.schemas.forecast import (
    BatchReconcileRequest,
    BatchStatusRequest,
    BatchStatusResponse,
    PeriodSummaryRequest,
    ScalingTableRequest,
    VarianceRequest,
    VarianceResponse,
)

__all__ = [
    "ScalingTableRequest",
    "BatchStatusRequest",
    "BatchStatusResponse",
    "BatchReconcileRequest",
    "VarianceRequest",
    "VarianceResponse",
    "PeriodSummaryRequest",
]

"""Calculation records: persistence, aggregation and HTTP surface."""

from .calculation_models import (
    CalculationRecord,
    CalculationRequest,
    CalculationSummaryData,
)
from .calculation_repository import CalculationRepository
from .calculation_service import CalculationService

__all__ = [
    "CalculationRecord",
    "CalculationRepository",
    "CalculationRequest",
    "CalculationService",
    "CalculationSummaryData",
]

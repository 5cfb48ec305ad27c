"""Database models and initialisation helpers."""

from .db_models import Base, CalculationModel, LockModel, MetricModel

__all__ = [
    "Base",
    "CalculationModel",
    "LockModel",
    "MetricModel",
]

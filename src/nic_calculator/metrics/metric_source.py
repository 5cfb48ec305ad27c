"""Metric sources feeding the published snapshot."""

from __future__ import annotations

from typing import Mapping, Protocol

from ..calculations.calculation_repository import CalculationRepository


class MetricSource(Protocol):
    def metrics(self) -> Mapping[str, int]:
        ...


class CalculationMetricSource:
    """All-time calculation statistics, truncated to integers."""

    def __init__(self, repository: CalculationRepository) -> None:
        self._repository = repository

    def metrics(self) -> dict[str, int]:
        repo = self._repository
        return {
            "numberOfCalculations": int(repo.number_of_calculations()),
            "numberOfUniqueSessions": int(repo.number_of_unique_sessions()),
            "totalSavings": int(repo.total_savings()),
            "totalSavingsAveragedBySession": int(
                repo.total_savings_averaged_by_session()
            ),
            "averageSalary": int(repo.average_salary()),
        }


__all__ = ["CalculationMetricSource", "MetricSource"]

"""Published metric snapshot and its lock-coordinated refresh."""

from .lock_repository import LockGuard, LockRepository, LockService
from .metric_orchestrator import MetricOrchestrator
from .metric_refresh_coordinator import (
    METRIC_UPDATE_TIMER,
    MetricRefreshCoordinator,
    RefreshOutcome,
)
from .metric_registry import MetricRegistry, Timer
from .metric_repository import MetricRepository
from .metric_source import CalculationMetricSource, MetricSource

__all__ = [
    "CalculationMetricSource",
    "LockGuard",
    "LockRepository",
    "LockService",
    "METRIC_UPDATE_TIMER",
    "MetricOrchestrator",
    "MetricRefreshCoordinator",
    "MetricRegistry",
    "MetricRepository",
    "MetricSource",
    "RefreshOutcome",
    "Timer",
]

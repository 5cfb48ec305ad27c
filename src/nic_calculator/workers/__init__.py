"""Background workers."""

from .metric_refresh_worker import MetricRefreshWorker

__all__ = ["MetricRefreshWorker"]

"""Decide whether a metrics refresh is due and run it under the shared lock."""

from __future__ import annotations

import logging
import time
from datetime import datetime, timedelta
from enum import Enum
from typing import Callable

from ..calculations.calculation_repository import CalculationRepository
from ..utils.datetimes import as_utc, utc_now
from .lock_repository import LockService
from .metric_orchestrator import MetricOrchestrator
from .metric_registry import MetricRegistry

METRIC_UPDATE_TIMER = "metric-update.timer"

logger = logging.getLogger(__name__)


class RefreshOutcome(str, Enum):
    """Terminal state of one coordinator tick."""

    SKIPPED_NO_DATA = "skipped_no_data"
    SKIPPED_STALE = "skipped_stale"
    SKIPPED_LOCKED = "skipped_locked"
    REFRESHED = "refreshed"
    FAILED = "failed"


class MetricRefreshCoordinator:
    """Refresh published metrics only when new data arrived recently.

    A tick refreshes when the newest calculation is younger than
    ``staleness_threshold`` and this instance wins the refresh lock. Every
    refresh attempt is timed; a failed refresh is logged and reported as
    :attr:`RefreshOutcome.FAILED`, never raised.
    """

    def __init__(
        self,
        *,
        calculation_repository: CalculationRepository,
        lock_service: LockService,
        orchestrator: MetricOrchestrator,
        metric_registry: MetricRegistry,
        staleness_threshold: timedelta,
        clock: Callable[[], datetime] | None = None,
        timer: Callable[[], float] = time.perf_counter,
    ) -> None:
        if staleness_threshold <= timedelta(0):
            raise ValueError("staleness_threshold must be positive")
        self._calculation_repository = calculation_repository
        self._lock_service = lock_service
        self._orchestrator = orchestrator
        self._staleness_threshold = staleness_threshold
        self._clock = clock or utc_now
        self._timer = timer
        self._metric_update_timer = metric_registry.timer(METRIC_UPDATE_TIMER)

    def update_metrics(self) -> RefreshOutcome:
        last = self._calculation_repository.last_calculation()
        if last is None:
            logger.debug("metrics.refresh.skipped", extra={"reason": "no_data"})
            return RefreshOutcome.SKIPPED_NO_DATA

        cutoff = as_utc(self._clock()) - self._staleness_threshold
        if not as_utc(last.timestamp) > cutoff:
            logger.debug("metrics.refresh.skipped", extra={"reason": "stale"})
            return RefreshOutcome.SKIPPED_STALE

        with self._lock_service.try_lock() as guard:
            if guard is None:
                logger.info(
                    "metrics.refresh.skipped",
                    extra={"reason": "lock_held", "lock_id": self._lock_service.lock_id},
                )
                self._reload_gauges()
                return RefreshOutcome.SKIPPED_LOCKED
            return self._refresh()

    def _refresh(self) -> RefreshOutcome:
        logger.info("Attempting metric refresh")
        start = self._timer()
        try:
            self._orchestrator.refresh()
        except Exception:
            logger.warning("Unable to refresh metrics", exc_info=True)
            return RefreshOutcome.FAILED
        finally:
            self._metric_update_timer.update(self._timer() - start)
        logger.info("Metrics refreshed")
        return RefreshOutcome.REFRESHED

    def _reload_gauges(self) -> None:
        try:
            self._orchestrator.refresh_gauges()
        except Exception:
            logger.warning("Unable to reload metric gauges", exc_info=True)


__all__ = ["METRIC_UPDATE_TIMER", "MetricRefreshCoordinator", "RefreshOutcome"]

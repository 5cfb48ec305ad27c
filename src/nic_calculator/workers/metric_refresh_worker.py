"""Scheduled trigger for the metrics refresh coordinator."""

from __future__ import annotations

import asyncio
import logging

from ..lifecycle import SupportsUpdateMetrics, run_periodic_metric_refresh

logger = logging.getLogger(__name__)


class MetricRefreshWorker:
    """Own the asyncio task that ticks the coordinator for the process lifetime."""

    def __init__(
        self,
        *,
        coordinator: SupportsUpdateMetrics,
        initial_delay_seconds: float,
        interval_seconds: float,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        if initial_delay_seconds < 0:
            raise ValueError("initial_delay_seconds cannot be negative")
        self._coordinator = coordinator
        self._initial_delay_seconds = initial_delay_seconds
        self._interval_seconds = interval_seconds
        self._task: asyncio.Task[None] | None = None
        self._shutdown_event: asyncio.Event | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        logger.info("Starting metric orchestration worker")
        self._shutdown_event = asyncio.Event()
        self._task = asyncio.create_task(
            run_periodic_metric_refresh(
                coordinator=self._coordinator,
                shutdown_event=self._shutdown_event,
                initial_delay_seconds=self._initial_delay_seconds,
                interval_seconds=self._interval_seconds,
            ),
            name="nic-calculator-metric-refresh",
        )

    async def stop(self) -> None:
        """Stop scheduling ticks and wait for an in-flight tick to finish."""
        if self._task is None:
            return
        logger.info("Stopping metric orchestration worker")
        if self._shutdown_event is not None:
            self._shutdown_event.set()
        task = self._task
        self._task = None
        self._shutdown_event = None
        await task


__all__ = ["MetricRefreshWorker"]

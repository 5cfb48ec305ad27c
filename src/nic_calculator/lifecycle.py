"""Lifecycle helpers wiring background tasks for FastAPI startup."""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol

from .metrics.metric_refresh_coordinator import RefreshOutcome

logger = logging.getLogger(__name__)


class SupportsUpdateMetrics(Protocol):
    def update_metrics(self) -> RefreshOutcome:
        ...


async def metric_refresh_once(coordinator: SupportsUpdateMetrics) -> RefreshOutcome | None:
    """Run one coordinator tick off the event loop; failures are only logged."""

    try:
        outcome = await asyncio.to_thread(coordinator.update_metrics)
    except Exception:
        logger.exception("Metric refresh tick failed")
        return None
    logger.debug("metrics.refresh.tick", extra={"outcome": outcome.value})
    return outcome


async def _wait(shutdown_event: asyncio.Event, timeout: float) -> bool:
    """Sleep up to ``timeout`` seconds; return ``True`` when shutdown was signalled."""

    if timeout <= 0:
        return shutdown_event.is_set()
    try:
        await asyncio.wait_for(shutdown_event.wait(), timeout=timeout)
    except asyncio.TimeoutError:
        return False
    return True


async def run_periodic_metric_refresh(
    *,
    coordinator: SupportsUpdateMetrics,
    shutdown_event: asyncio.Event,
    initial_delay_seconds: float,
    interval_seconds: float,
) -> None:
    """Tick ``coordinator`` at a fixed rate until ``shutdown_event`` is signalled.

    A tick already running when shutdown is requested finishes before the
    loop exits.
    """

    interval = max(0.001, float(interval_seconds))
    loop = asyncio.get_running_loop()
    if await _wait(shutdown_event, max(0.0, float(initial_delay_seconds))):
        return
    next_run = loop.time()
    while not shutdown_event.is_set():
        await metric_refresh_once(coordinator)
        next_run += interval
        if await _wait(shutdown_event, next_run - loop.time()):
            return


__all__ = ["metric_refresh_once", "run_periodic_metric_refresh"]

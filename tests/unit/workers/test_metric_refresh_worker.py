from __future__ import annotations

import asyncio
import threading
import time

import pytest

from nic_calculator.lifecycle import metric_refresh_once, run_periodic_metric_refresh
from nic_calculator.metrics.metric_refresh_coordinator import RefreshOutcome
from nic_calculator.workers.metric_refresh_worker import MetricRefreshWorker

pytestmark = pytest.mark.unit


class CountingCoordinator:
    def __init__(self, *, fail_first: int = 0, delay: float = 0.0) -> None:
        self.calls = 0
        self.fail_first = fail_first
        self.delay = delay
        self.finished = 0
        self._lock = threading.Lock()

    def update_metrics(self) -> RefreshOutcome:
        with self._lock:
            self.calls += 1
            call = self.calls
        if self.delay:
            time.sleep(self.delay)
        if call <= self.fail_first:
            raise RuntimeError("tick failed")
        with self._lock:
            self.finished += 1
        return RefreshOutcome.REFRESHED


async def _wait_for(predicate, timeout: float = 2.0) -> None:
    deadline = asyncio.get_running_loop().time() + timeout
    while not predicate():
        if asyncio.get_running_loop().time() > deadline:
            raise AssertionError("condition not met in time")
        await asyncio.sleep(0.005)


@pytest.mark.asyncio
async def test_refresh_once_returns_outcome() -> None:
    coordinator = CountingCoordinator()

    assert await metric_refresh_once(coordinator) is RefreshOutcome.REFRESHED
    assert coordinator.calls == 1


@pytest.mark.asyncio
async def test_refresh_once_logs_and_swallows_tick_failure(
    caplog: pytest.LogCaptureFixture,
) -> None:
    coordinator = CountingCoordinator(fail_first=1)

    with caplog.at_level("ERROR"):
        assert await metric_refresh_once(coordinator) is None

    assert "Metric refresh tick failed" in caplog.text


@pytest.mark.asyncio
async def test_periodic_refresh_keeps_ticking_after_failure() -> None:
    coordinator = CountingCoordinator(fail_first=2)
    shutdown = asyncio.Event()
    task = asyncio.create_task(
        run_periodic_metric_refresh(
            coordinator=coordinator,
            shutdown_event=shutdown,
            initial_delay_seconds=0,
            interval_seconds=0.01,
        )
    )

    await _wait_for(lambda: coordinator.finished >= 2)
    shutdown.set()
    await asyncio.wait_for(task, timeout=1)

    assert coordinator.calls >= 4


@pytest.mark.asyncio
async def test_periodic_refresh_honours_initial_delay() -> None:
    coordinator = CountingCoordinator()
    shutdown = asyncio.Event()
    task = asyncio.create_task(
        run_periodic_metric_refresh(
            coordinator=coordinator,
            shutdown_event=shutdown,
            initial_delay_seconds=30,
            interval_seconds=0.01,
        )
    )

    await asyncio.sleep(0.05)
    shutdown.set()
    await asyncio.wait_for(task, timeout=1)

    assert coordinator.calls == 0


@pytest.mark.asyncio
async def test_worker_stop_waits_for_in_flight_tick() -> None:
    coordinator = CountingCoordinator(delay=0.1)
    worker = MetricRefreshWorker(
        coordinator=coordinator, initial_delay_seconds=0, interval_seconds=60
    )

    worker.start()
    await _wait_for(lambda: coordinator.calls == 1)
    await worker.stop()

    assert coordinator.finished == 1
    assert not worker.running


@pytest.mark.asyncio
async def test_worker_start_is_idempotent() -> None:
    coordinator = CountingCoordinator()
    worker = MetricRefreshWorker(
        coordinator=coordinator, initial_delay_seconds=60, interval_seconds=60
    )

    worker.start()
    worker.start()
    assert worker.running

    await worker.stop()
    await worker.stop()

    assert not worker.running
    assert coordinator.calls == 0


@pytest.mark.parametrize(
    ("delay", "interval"),
    [(0, 0), (0, -1), (-1, 1)],
)
def test_worker_rejects_invalid_schedule(delay: float, interval: float) -> None:
    with pytest.raises(ValueError):
        MetricRefreshWorker(
            coordinator=CountingCoordinator(),
            initial_delay_seconds=delay,
            interval_seconds=interval,
        )

"""Dependency wiring helpers."""

from __future__ import annotations

from fastapi import FastAPI

from .calculations.calculation_api import router as calculation_router
from .calculations.calculation_repository import CalculationRepository
from .calculations.calculation_service import CalculationService
from .config import AppConfig
from .metrics.lock_repository import LockRepository, LockService
from .metrics.metric_orchestrator import MetricOrchestrator
from .metrics.metric_refresh_coordinator import MetricRefreshCoordinator
from .metrics.metric_registry import MetricRegistry
from .metrics.metric_repository import MetricRepository
from .metrics.metric_source import CalculationMetricSource
from .metrics.metrics_api import router as metrics_router
from .security.session_hasher import SessionHasher
from .workers.metric_refresh_worker import MetricRefreshWorker


def include_routers(app: FastAPI, config: AppConfig) -> None:
    """Mount module routers and attach services."""
    calculation_repo = CalculationRepository(config.session_factory)
    hasher = SessionHasher.from_base64(config.crypto_key)
    calculation_service = CalculationService(repository=calculation_repo, hasher=hasher)

    metric_registry = MetricRegistry()
    metric_repo = MetricRepository(config.session_factory)
    lock_service = LockService(
        LockRepository(config.session_factory),
        lock_id=config.worker.lock_id,
        ttl=config.worker.lock_ttl,
    )
    orchestrator = MetricOrchestrator(
        sources=[CalculationMetricSource(calculation_repo)],
        metric_repository=metric_repo,
        metric_registry=metric_registry,
    )
    coordinator = MetricRefreshCoordinator(
        calculation_repository=calculation_repo,
        lock_service=lock_service,
        orchestrator=orchestrator,
        metric_registry=metric_registry,
        staleness_threshold=config.worker.staleness_threshold,
    )
    worker = MetricRefreshWorker(
        coordinator=coordinator,
        initial_delay_seconds=config.worker.initial_delay.total_seconds(),
        interval_seconds=config.worker.interval.total_seconds(),
    )

    app.state.config = config
    app.state.calculation_repo = calculation_repo
    app.state.calculation_service = calculation_service
    app.state.metric_registry = metric_registry
    app.state.metric_orchestrator = orchestrator
    app.state.metric_refresh_coordinator = coordinator
    app.state.metric_refresh_worker = worker

    app.include_router(calculation_router)
    app.include_router(metrics_router)

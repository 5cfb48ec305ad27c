"""Recompute, persist and publish the metric snapshot."""

from __future__ import annotations

import logging
from typing import Sequence

from .metric_registry import MetricRegistry
from .metric_repository import MetricRepository
from .metric_source import MetricSource

logger = logging.getLogger(__name__)


class MetricOrchestrator:
    """Gather every source into the shared snapshot and the local gauges.

    Callers are expected to hold the refresh lock around :meth:`refresh`;
    :meth:`refresh_gauges` only reads and is safe without it.
    """

    def __init__(
        self,
        *,
        sources: Sequence[MetricSource],
        metric_repository: MetricRepository,
        metric_registry: MetricRegistry,
    ) -> None:
        self._sources = list(sources)
        self._metric_repository = metric_repository
        self._metric_registry = metric_registry

    def refresh(self) -> dict[str, int]:
        collected: dict[str, int] = {}
        for source in self._sources:
            collected.update(source.metrics())
        self._metric_repository.persist(collected)
        logger.info("metrics.snapshot.persisted", extra={"metrics": collected})
        return self.refresh_gauges()

    def refresh_gauges(self) -> dict[str, int]:
        snapshot = self._metric_repository.find_all()
        self._metric_registry.set_gauges(snapshot)
        return snapshot


__all__ = ["MetricOrchestrator"]

"""Prometheus /metrics endpoint."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from .metric_registry import MetricRegistry


def get_metric_registry(request: Request) -> MetricRegistry:
    registry = getattr(request.app.state, "metric_registry", None)
    if registry is None:
        raise RuntimeError("Metric registry is not configured")
    return registry


router = APIRouter()


@router.get("/metrics", response_class=PlainTextResponse)
async def metrics(registry: MetricRegistry = Depends(get_metric_registry)) -> str:
    """Expose published metrics and refresh timings."""
    return registry.render()

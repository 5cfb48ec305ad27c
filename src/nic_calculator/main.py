"""FastAPI application entry point."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .config import AppConfig, load_config
from .dependencies import include_routers
from .logging import configure_logging


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    config: AppConfig = app.state.config
    worker = app.state.metric_refresh_worker
    if config.worker.enabled:
        worker.start()
    try:
        yield
    finally:
        await worker.stop()
        config.engine.dispose()


def create_app(config: AppConfig | None = None) -> FastAPI:
    """Build FastAPI instance with configured dependencies."""
    configure_logging()
    cfg = config or load_config()
    app = FastAPI(title="NIC change calculator statistics", lifespan=_lifespan)
    include_routers(app, cfg)
    return app

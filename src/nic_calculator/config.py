"""Application configuration builder."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from .db.db_init import init_db

# Placeholder key for local runs only; deployments set NIC_CALCULATOR_CRYPTO_KEY.
_LOCAL_CRYPTO_KEY = "eTWbbFeb1TPUBE5vq6A+LUGhl3LVtZwHhzZggfLMjpc="


class Settings(BaseSettings):
    """Environment driven settings (prefix ``NIC_CALCULATOR_``)."""

    model_config = SettingsConfigDict(env_prefix="NIC_CALCULATOR_", env_file=".env")

    database_url: str = Field(
        default="sqlite:///nic_calculator.db",
        description="SQLAlchemy URL of the record store.",
    )
    crypto_key: str = Field(
        default=_LOCAL_CRYPTO_KEY,
        min_length=1,
        description="Base64 key material for hashing session identifiers.",
    )
    metrics_worker_enabled: bool = Field(
        default=True,
        description="Start the scheduled metrics refresh with the application.",
    )
    metrics_initial_delay_seconds: float = Field(default=60.0, ge=0)
    metrics_interval_seconds: float = Field(default=60.0, gt=0)
    metrics_staleness_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Newest calculation age beyond which refresh is skipped (defaults to the interval).",
    )
    metrics_lock_id: str = Field(default="metrix-orchestrator", min_length=1)
    metrics_lock_ttl_seconds: float = Field(default=300.0, gt=0)

    @model_validator(mode="after")
    def _default_staleness(self) -> "Settings":
        if self.metrics_staleness_seconds is None:
            self.metrics_staleness_seconds = self.metrics_interval_seconds
        return self


@dataclass(slots=True)
class WorkerConfig:
    enabled: bool
    initial_delay: timedelta
    interval: timedelta
    staleness_threshold: timedelta
    lock_id: str
    lock_ttl: timedelta


@dataclass(slots=True)
class AppConfig:
    database_url: str
    engine: Engine
    session_factory: sessionmaker[Session]
    crypto_key: str
    worker: WorkerConfig


def load_config(settings: Settings | None = None) -> AppConfig:
    """Load configuration from environment (SQLite by default) and create tables."""
    settings = settings or Settings()

    connect_args: dict[str, object] = {}
    if settings.database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    engine = create_engine(settings.database_url, future=True, connect_args=connect_args)
    session_factory: sessionmaker[Session] = sessionmaker(bind=engine, expire_on_commit=False)

    init_db(engine)

    staleness = settings.metrics_staleness_seconds
    worker = WorkerConfig(
        enabled=settings.metrics_worker_enabled,
        initial_delay=timedelta(seconds=settings.metrics_initial_delay_seconds),
        interval=timedelta(seconds=settings.metrics_interval_seconds),
        staleness_threshold=timedelta(seconds=staleness),
        lock_id=settings.metrics_lock_id,
        lock_ttl=timedelta(seconds=settings.metrics_lock_ttl_seconds),
    )

    return AppConfig(
        database_url=settings.database_url,
        engine=engine,
        session_factory=session_factory,
        crypto_key=settings.crypto_key,
        worker=worker,
    )

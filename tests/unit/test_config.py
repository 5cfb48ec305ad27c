from datetime import timedelta
from pathlib import Path

import pytest

from nic_calculator.config import Settings, load_config

pytestmark = pytest.mark.unit


def _config(tmp_path: Path, **overrides):
    settings = Settings(database_url=f"sqlite:///{tmp_path / 'config.db'}", **overrides)
    config = load_config(settings)
    config.engine.dispose()
    return config


def test_staleness_defaults_to_refresh_interval(tmp_path: Path) -> None:
    config = _config(tmp_path, metrics_interval_seconds=45)

    assert config.worker.interval == timedelta(seconds=45)
    assert config.worker.staleness_threshold == timedelta(seconds=45)


def test_explicit_staleness_overrides_interval(tmp_path: Path) -> None:
    config = _config(
        tmp_path, metrics_interval_seconds=60, metrics_staleness_seconds=15
    )

    assert config.worker.staleness_threshold == timedelta(seconds=15)


def test_non_positive_staleness_is_rejected() -> None:
    with pytest.raises(ValueError):
        Settings(metrics_staleness_seconds=0)

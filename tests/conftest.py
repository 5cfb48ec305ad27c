from __future__ import annotations

from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from nic_calculator.db.db_init import init_db


@pytest.fixture
def session_factory(tmp_path: Path) -> sessionmaker[Session]:
    """Fresh SQLite record store per test."""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'calculations.db'}",
        future=True,
        connect_args={"check_same_thread": False},
    )
    init_db(engine)
    yield sessionmaker(bind=engine, expire_on_commit=False)
    engine.dispose()

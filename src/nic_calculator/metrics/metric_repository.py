"""Persisted metric snapshot shared by all instances."""

from __future__ import annotations

from collections.abc import Callable, Mapping

from sqlalchemy.orm import Session

from ..db.db_models import MetricModel
from ..exceptions import handle_sqlalchemy_errors


class MetricRepository:
    """Store the latest value of each published metric by name."""

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def persist(self, metrics: Mapping[str, int]) -> None:
        with handle_sqlalchemy_errors(entity="metric"):
            with self._session_factory() as session:
                for name, count in metrics.items():
                    session.merge(MetricModel(name=name, count=int(count)))
                session.commit()

    def find_all(self) -> dict[str, int]:
        with handle_sqlalchemy_errors(entity="metric"):
            with self._session_factory() as session:
                rows = session.query(MetricModel).order_by(MetricModel.name).all()
                return {row.name: row.count for row in rows}


__all__ = ["MetricRepository"]

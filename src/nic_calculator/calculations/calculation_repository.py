"""Database aggregations over the calculation records."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from decimal import ROUND_DOWN, Decimal

from sqlalchemy import ColumnElement, distinct, func
from sqlalchemy.orm import Session

from ..db.db_models import CalculationModel
from ..exceptions import handle_sqlalchemy_errors
from ..utils.datetimes import as_utc
from .calculation_models import CalculationRecord

_ZERO = Decimal(0)


class CalculationRepository:
    """Persist calculations and compute windowed statistics over them.

    Every aggregate accepts optional ``from_``/``to`` bounds and only considers
    records with ``from_ <= timestamp < to``; a missing bound leaves that side
    open. Aggregates over an empty selection return zero.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def save(self, calculation: CalculationRecord) -> None:
        with handle_sqlalchemy_errors(entity="calculation"):
            with self._session_factory() as session:
                session.add(
                    CalculationModel(
                        session_id=calculation.session_id,
                        annual_salary=calculation.annual_salary,
                        year1_estimated_nic=calculation.year1_estimated_nic,
                        year2_estimated_nic=calculation.year2_estimated_nic,
                        rounded_saving=calculation.rounded_saving,
                        saving=calculation.saving,
                        timestamp=as_utc(calculation.timestamp),
                    )
                )
                session.commit()

    def last_calculation(self) -> CalculationRecord | None:
        """Return the most recent calculation regardless of any window."""
        with handle_sqlalchemy_errors(entity="calculation"):
            with self._session_factory() as session:
                row = (
                    session.query(CalculationModel)
                    .order_by(CalculationModel.timestamp.desc())
                    .first()
                )
                if row is None:
                    return None
                return self._to_record(row)

    def number_of_calculations(
        self, from_: datetime | None = None, to: datetime | None = None
    ) -> int:
        with handle_sqlalchemy_errors(entity="calculation"):
            with self._session_factory() as session:
                return (
                    session.query(func.count(CalculationModel.id))
                    .filter(*self._window(from_, to))
                    .scalar()
                    or 0
                )

    def number_of_unique_sessions(
        self, from_: datetime | None = None, to: datetime | None = None
    ) -> int:
        with handle_sqlalchemy_errors(entity="calculation"):
            with self._session_factory() as session:
                return (
                    session.query(func.count(distinct(CalculationModel.session_id)))
                    .filter(*self._window(from_, to))
                    .scalar()
                    or 0
                )

    def number_of_calculations_with_no_savings(
        self, from_: datetime | None = None, to: datetime | None = None
    ) -> int:
        with handle_sqlalchemy_errors(entity="calculation"):
            with self._session_factory() as session:
                return (
                    session.query(func.count(CalculationModel.id))
                    .filter(
                        CalculationModel.rounded_saving == 0,
                        *self._window(from_, to),
                    )
                    .scalar()
                    or 0
                )

    def total_savings(
        self, from_: datetime | None = None, to: datetime | None = None
    ) -> Decimal:
        with handle_sqlalchemy_errors(entity="calculation"):
            with self._session_factory() as session:
                total = (
                    session.query(func.sum(CalculationModel.rounded_saving))
                    .filter(*self._window(from_, to))
                    .scalar()
                )
        return self._as_decimal(total)

    def total_savings_averaged_by_session(
        self, from_: datetime | None = None, to: datetime | None = None
    ) -> Decimal:
        """Sum over sessions of each session's mean rounded saving."""
        with handle_sqlalchemy_errors(entity="calculation"):
            with self._session_factory() as session:
                per_session = (
                    session.query(
                        CalculationModel.session_id,
                        func.avg(CalculationModel.rounded_saving).label(
                            "average_savings"
                        ),
                    )
                    .filter(*self._window(from_, to))
                    .group_by(CalculationModel.session_id)
                    .subquery()
                )
                total = session.query(
                    func.sum(per_session.c.average_savings)
                ).scalar()
        return self._as_decimal(total)

    def average_salary(
        self, from_: datetime | None = None, to: datetime | None = None
    ) -> Decimal:
        """Mean annual salary truncated toward zero."""
        with handle_sqlalchemy_errors(entity="calculation"):
            with self._session_factory() as session:
                average = (
                    session.query(func.avg(CalculationModel.annual_salary))
                    .filter(*self._window(from_, to))
                    .scalar()
                )
        return self._as_decimal(average).to_integral_value(rounding=ROUND_DOWN)

    @staticmethod
    def _window(
        from_: datetime | None, to: datetime | None
    ) -> list[ColumnElement[bool]]:
        conditions: list[ColumnElement[bool]] = []
        if from_ is not None:
            conditions.append(CalculationModel.timestamp >= as_utc(from_))
        if to is not None:
            conditions.append(CalculationModel.timestamp < as_utc(to))
        return conditions

    @staticmethod
    def _as_decimal(value: object) -> Decimal:
        if value is None:
            return _ZERO
        if isinstance(value, Decimal):
            return value
        return Decimal(str(value))

    @staticmethod
    def _to_record(row: CalculationModel) -> CalculationRecord:
        return CalculationRecord(
            session_id=row.session_id,
            annual_salary=row.annual_salary,
            year1_estimated_nic=row.year1_estimated_nic,
            year2_estimated_nic=row.year2_estimated_nic,
            rounded_saving=row.rounded_saving,
            saving=row.saving,
            timestamp=as_utc(row.timestamp),
        )


__all__ = ["CalculationRepository"]

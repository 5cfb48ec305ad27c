"""SQLAlchemy ORM models."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, Index, Integer, Numeric, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base declarative class."""


class CalculationModel(Base):
    __tablename__ = "calculations"
    __table_args__ = (Index("timestampIdx", "timestamp", unique=False),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    session_id: Mapped[str] = mapped_column(String(256), nullable=False)
    annual_salary: Mapped[Decimal] = mapped_column(Numeric, nullable=False)
    year1_estimated_nic: Mapped[Decimal] = mapped_column(Numeric, nullable=False)
    year2_estimated_nic: Mapped[Decimal] = mapped_column(Numeric, nullable=False)
    rounded_saving: Mapped[Decimal] = mapped_column(Numeric, nullable=False)
    saving: Mapped[Decimal | None] = mapped_column(Numeric)
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class LockModel(Base):
    __tablename__ = "locks"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    owner: Mapped[str] = mapped_column(String(128), nullable=False)
    time_created: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    expiry_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class MetricModel(Base):
    __tablename__ = "metrics"

    name: Mapped[str] = mapped_column(String(128), primary_key=True)
    count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

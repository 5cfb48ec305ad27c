"""Calculation record, request payload and summary report models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel


def _decimal_to_number(value: Decimal) -> int | float:
    if value == value.to_integral_value():
        return int(value)
    return float(value)


JsonDecimal = Annotated[
    Decimal,
    PlainSerializer(_decimal_to_number, return_type=int | float, when_used="json"),
]


@dataclass(frozen=True, slots=True)
class CalculationRecord:
    """A single anonymised calculation as persisted in the record store."""

    session_id: str
    annual_salary: Decimal
    year1_estimated_nic: Decimal
    year2_estimated_nic: Decimal
    rounded_saving: Decimal
    timestamp: datetime
    saving: Decimal | None = None


class CalculationRequest(BaseModel):
    """Payload submitted by the calculator front-end."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    annual_salary: Decimal
    year1_estimated_nic: Decimal
    year2_estimated_nic: Decimal
    rounded_saving: Decimal
    saving: Decimal | None = None


class CalculationSummaryData(BaseModel):
    """Aggregate statistics over the calculations within ``[from, to)``."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    from_: datetime | None = Field(default=None, alias="from")
    to: datetime | None = None
    number_of_calculations: int
    number_of_unique_sessions: int
    number_of_calculations_with_no_savings: int | None = None
    total_savings: JsonDecimal
    total_savings_averaged_by_session: JsonDecimal
    average_salary: JsonDecimal


__all__ = [
    "CalculationRecord",
    "CalculationRequest",
    "CalculationSummaryData",
]

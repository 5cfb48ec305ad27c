from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from nic_calculator.calculations.calculation_models import (
    CalculationRequest,
    CalculationSummaryData,
)

pytestmark = pytest.mark.unit


def test_request_reads_camel_case_payload() -> None:
    request = CalculationRequest.model_validate(
        {
            "annualSalary": 1,
            "year1EstimatedNic": "2.2",
            "year2EstimatedNic": "3.3",
            "roundedSaving": 4,
        }
    )

    assert request.annual_salary == Decimal(1)
    assert request.year1_estimated_nic == Decimal("2.2")
    assert request.saving is None


def test_request_requires_all_figures() -> None:
    with pytest.raises(ValueError):
        CalculationRequest.model_validate({"annualSalary": 1})


def test_summary_serialises_with_wire_names() -> None:
    summary = CalculationSummaryData(
        from_=datetime(2024, 2, 1, tzinfo=timezone.utc),
        to=None,
        number_of_calculations=4,
        number_of_unique_sessions=2,
        number_of_calculations_with_no_savings=0,
        total_savings=Decimal(3301),
        total_savings_averaged_by_session=Decimal("1650.5"),
        average_salary=Decimal(15000),
    )

    payload = summary.model_dump(mode="json", by_alias=True)

    assert payload == {
        "from": "2024-02-01T00:00:00Z",
        "to": None,
        "numberOfCalculations": 4,
        "numberOfUniqueSessions": 2,
        "numberOfCalculationsWithNoSavings": 0,
        "totalSavings": 3301,
        "totalSavingsAveragedBySession": 1650.5,
        "averageSalary": 15000,
    }

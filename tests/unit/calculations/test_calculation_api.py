from datetime import datetime, timezone
from decimal import Decimal

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from nic_calculator.calculations.calculation_api import SESSION_ID_HEADER, router
from nic_calculator.calculations.calculation_models import (
    CalculationRequest,
    CalculationSummaryData,
)
from nic_calculator.exceptions import StorageError

pytestmark = pytest.mark.unit

PAYLOAD = {
    "annualSalary": 1,
    "year1EstimatedNic": 2.2,
    "year2EstimatedNic": 3.3,
    "roundedSaving": 4,
}


class DummyCalculationService:
    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.saved: list[tuple[str, CalculationRequest]] = []
        self.summary_requests: list[tuple[datetime | None, datetime | None]] = []

    def save(self, session_id: str, request: CalculationRequest) -> None:
        if self.fail:
            raise StorageError("store down")
        self.saved.append((session_id, request))

    def summary(
        self, from_: datetime | None = None, to: datetime | None = None
    ) -> CalculationSummaryData:
        if self.fail:
            raise StorageError("store down")
        self.summary_requests.append((from_, to))
        return CalculationSummaryData(
            from_=from_,
            to=to,
            number_of_calculations=1000,
            number_of_unique_sessions=500,
            number_of_calculations_with_no_savings=20,
            total_savings=Decimal(10000),
            total_savings_averaged_by_session=Decimal("50.5"),
            average_salary=Decimal(15000),
        )


def build_client(service: DummyCalculationService) -> TestClient:
    app = FastAPI()
    app.include_router(router)
    app.state.calculation_service = service
    return TestClient(app)


def test_save_calculation_forwards_session_and_payload() -> None:
    service = DummyCalculationService()
    client = build_client(service)

    response = client.post(
        "/calculation", json=PAYLOAD, headers={SESSION_ID_HEADER: "foo"}
    )

    assert response.status_code == 200
    assert response.content == b""
    assert len(service.saved) == 1
    session_id, request = service.saved[0]
    assert session_id == "foo"
    assert request.annual_salary == Decimal(1)
    assert request.rounded_saving == Decimal(4)


def test_save_calculation_without_session_header_is_rejected() -> None:
    service = DummyCalculationService()
    client = build_client(service)

    response = client.post("/calculation", json=PAYLOAD)

    assert response.status_code == 400
    assert response.json()["detail"] == {
        "status": "error",
        "failure_reason": "missing_session_id",
    }
    assert service.saved == []


def test_save_calculation_rejects_incomplete_payload() -> None:
    service = DummyCalculationService()
    client = build_client(service)

    response = client.post(
        "/calculation", json={"annualSalary": 1}, headers={SESSION_ID_HEADER: "foo"}
    )

    assert response.status_code == 422
    assert service.saved == []


def test_save_calculation_storage_failure_returns_500() -> None:
    client = build_client(DummyCalculationService(fail=True))

    response = client.post(
        "/calculation", json=PAYLOAD, headers={SESSION_ID_HEADER: "foo"}
    )

    assert response.status_code == 500
    assert response.json()["detail"]["failure_reason"] == "storage_unavailable"


def test_summary_forwards_window_and_uses_wire_names() -> None:
    service = DummyCalculationService()
    client = build_client(service)

    response = client.get(
        "/summary",
        params={"from": "2024-02-01T00:00:00Z", "to": "2025-02-01T00:00:00Z"},
    )

    assert response.status_code == 200
    assert service.summary_requests == [
        (
            datetime(2024, 2, 1, tzinfo=timezone.utc),
            datetime(2025, 2, 1, tzinfo=timezone.utc),
        )
    ]
    body = response.json()
    assert body["numberOfCalculations"] == 1000
    assert body["numberOfUniqueSessions"] == 500
    assert body["numberOfCalculationsWithNoSavings"] == 20
    assert body["totalSavings"] == 10000
    assert body["totalSavingsAveragedBySession"] == 50.5
    assert body["averageSalary"] == 15000
    assert body["from"].startswith("2024-02-01T00:00:00")


def test_summary_without_window_is_unbounded() -> None:
    service = DummyCalculationService()
    client = build_client(service)

    response = client.get("/summary")

    assert response.status_code == 200
    assert service.summary_requests == [(None, None)]
    assert response.json()["from"] is None


def test_summary_storage_failure_returns_500() -> None:
    client = build_client(DummyCalculationService(fail=True))

    response = client.get("/summary")

    assert response.status_code == 500

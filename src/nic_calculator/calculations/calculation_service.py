"""Business orchestration over the calculation repository."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from ..security.session_hasher import SessionHasher
from ..utils.datetimes import utc_now
from .calculation_models import (
    CalculationRecord,
    CalculationRequest,
    CalculationSummaryData,
)
from .calculation_repository import CalculationRepository

logger = logging.getLogger(__name__)


class CalculationService:
    """Store anonymised calculations and assemble summary reports."""

    def __init__(
        self,
        *,
        repository: CalculationRepository,
        hasher: SessionHasher,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._repository = repository
        self._hasher = hasher
        self._clock = clock or utc_now

    def save(self, session_id: str, request: CalculationRequest) -> None:
        """Persist ``request`` under the hashed ``session_id``.

        Field ranges are not validated here; callers upstream own that policy.
        """
        calculation = CalculationRecord(
            session_id=self._hasher.hash(session_id),
            annual_salary=request.annual_salary,
            year1_estimated_nic=request.year1_estimated_nic,
            year2_estimated_nic=request.year2_estimated_nic,
            rounded_saving=request.rounded_saving,
            saving=request.saving,
            timestamp=self._clock(),
        )
        self._repository.save(calculation)
        logger.debug(
            "calculation.saved",
            extra={"timestamp": calculation.timestamp.isoformat()},
        )

    def summary(
        self, from_: datetime | None = None, to: datetime | None = None
    ) -> CalculationSummaryData:
        """Build the summary report for ``[from_, to)``.

        Aggregates run one after another; the first failure propagates and the
        remaining aggregates are not requested.
        """
        repo = self._repository
        number_of_calculations = repo.number_of_calculations(from_, to)
        number_of_unique_sessions = repo.number_of_unique_sessions(from_, to)
        number_with_no_savings = repo.number_of_calculations_with_no_savings(from_, to)
        total_savings = repo.total_savings(from_, to)
        total_savings_averaged_by_session = repo.total_savings_averaged_by_session(
            from_, to
        )
        average_salary = repo.average_salary(from_, to)
        return CalculationSummaryData(
            from_=from_,
            to=to,
            number_of_calculations=number_of_calculations,
            number_of_unique_sessions=number_of_unique_sessions,
            number_of_calculations_with_no_savings=number_with_no_savings,
            total_savings=total_savings,
            total_savings_averaged_by_session=total_savings_averaged_by_session,
            average_salary=average_salary,
        )


__all__ = ["CalculationService"]

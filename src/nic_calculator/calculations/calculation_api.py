"""HTTP routes for saving calculations and reading the summary."""

from __future__ import annotations

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request, status
from fastapi.responses import Response

from ..exceptions import StorageError
from .calculation_models import CalculationRequest, CalculationSummaryData
from .calculation_service import CalculationService

SESSION_ID_HEADER = "X-Session-ID"

router = APIRouter(tags=["calculations"])
logger = logging.getLogger(__name__)


def get_calculation_service(request: Request) -> CalculationService:
    """Fetch calculation service from application state."""
    try:
        return request.app.state.calculation_service  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive path
        raise RuntimeError("CalculationService is not configured") from exc


def _storage_unavailable() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"status": "error", "failure_reason": "storage_unavailable"},
    )


@router.post("/calculation")
def save_calculation(
    payload: CalculationRequest,
    session_id: str | None = Header(default=None, alias=SESSION_ID_HEADER),
    service: CalculationService = Depends(get_calculation_service),
) -> Response:
    """Record one calculation for the caller's session."""
    if not session_id:
        logger.warning("calculation.save.missing_session_id")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"status": "error", "failure_reason": "missing_session_id"},
        )
    try:
        service.save(session_id, payload)
    except StorageError as exc:
        logger.error("calculation.save.failed", exc_info=exc)
        raise _storage_unavailable() from exc
    return Response(status_code=status.HTTP_200_OK)


@router.get(
    "/summary",
    response_model=CalculationSummaryData,
    response_model_by_alias=True,
)
def calculation_summary(
    from_: datetime | None = Query(default=None, alias="from"),
    to: datetime | None = Query(default=None),
    service: CalculationService = Depends(get_calculation_service),
) -> CalculationSummaryData:
    """Return aggregate statistics over ``[from, to)``."""
    try:
        return service.summary(from_=from_, to=to)
    except StorageError as exc:
        logger.error("calculation.summary.failed", exc_info=exc)
        raise _storage_unavailable() from exc


__all__ = ["SESSION_ID_HEADER", "get_calculation_service", "router"]

"""Daily performance JSON endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from totem.core.exceptions import InvalidInputError, NotFoundError, StoreError
from totem.core.logging import get_logger
from totem.services.reports import ReportService

router = APIRouter(tags=["performance"])
log = get_logger("totem.api.performance")


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.get("/locations/{location_id}/performance")
def location_performance(location_id: str, request: Request, start: str = "", end: str = ""):
    """Per-day sales/labor records and their range summary.

    With no ``start``/``end`` the default trailing window is used.
    """
    try:
        loc_id = int(location_id)
    except ValueError:
        return _error(400, "invalid location id")

    service = ReportService(settings=request.app.state.settings, store=request.app.state.store)
    try:
        start_date, end_date = service.resolve_range(start, end)
        records, summary = service.performance(loc_id, start_date, end_date)
    except InvalidInputError as exc:
        return _error(400, str(exc))
    except NotFoundError as exc:
        return _error(404, str(exc))
    except StoreError as exc:
        log.error("performance_failed", location_id=loc_id, error=str(exc))
        return _error(500, str(exc))

    # Python-mode dumps keep Decimals, which the encoder emits as JSON numbers.
    return JSONResponse(content=jsonable_encoder({
        "summary": summary.model_dump(),
        "records": [r.model_dump() for r in records],
        "startDate": start_date.isoformat(),
        "endDate": end_date.isoformat(),
    }))

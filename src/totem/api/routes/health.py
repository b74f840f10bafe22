"""Health check endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from totem.core.exceptions import StoreError
from totem.core.logging import get_logger

router = APIRouter(tags=["health"])
log = get_logger("totem.api.health")


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}


@router.get("/ready")
def ready(request: Request):
    store = request.app.state.store
    if store is None:
        return JSONResponse(status_code=503, content={"status": "starting"})
    try:
        store.list_locations()
    except StoreError as exc:
        log.warning("readiness_failed", error=str(exc))
        return JSONResponse(status_code=503, content={"status": "unavailable", "error": str(exc)})
    return {"status": "ready"}

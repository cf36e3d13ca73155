"""Health check endpoints — used by load balancers and uptime monitoring."""

from __future__ import annotations

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from muu.config import settings
from muu.database import check_db_connectivity

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

VERSION = "1.0.0"


@router.get("/health")
async def health() -> dict:
    """Liveness check — returns 200 if the process is running."""
    return {"status": "ok", "version": VERSION}


@router.get("/ready")
async def ready() -> JSONResponse:
    """
    Readiness check — checks DB connectivity and that the provider key is set.
    Returns 200 with {"db": "ok", "provider_key": "ok"} when fully ready,
    or 503 with the failing component marked. The provider is never called.
    """
    status: dict[str, str] = {}
    all_ok = True

    db_ok = await check_db_connectivity()
    status["db"] = "ok" if db_ok else "error"
    if not db_ok:
        logger.warning("Readiness: database unreachable")
        all_ok = False

    if settings.groq_api_key:
        status["provider_key"] = "ok"
    else:
        status["provider_key"] = "missing"
        all_ok = False

    http_status = 200 if all_ok else 503
    return JSONResponse(content=status, status_code=http_status)

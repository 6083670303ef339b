"""
EduPro Backend: Health Check Routes
======================================

What:  Keep-alive and health endpoints for hosting platforms and monitoring.
Why:   Free-tier hosts sleep idle services; their wake-up ping hits `/` and
       must not 404. Monitoring hits `/health` for dependency status.
How:   `/` answers plain text with no dependency checks. `/health` runs
       SELECT 1 against the database and a live search probe.

Status levels:
    - healthy:   Database and search reachable
    - degraded:  Search unreachable (notes and reports still work)
    - unhealthy: Database unreachable
"""

import logging
import time

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from sqlalchemy import text

from edupro import __version__
from edupro.dependencies import get_identity_verifier, get_search_service
from edupro.schemas.common import HealthResponse
from edupro.services.auth_base import IdentityVerifier
from edupro.services.search_service import SearchService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/", response_class=PlainTextResponse, summary="Keep-alive probe")
async def root() -> str:
    return "Backend is Active! 🚀"


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    verifier: IdentityVerifier = Depends(get_identity_verifier),
    search_service: SearchService = Depends(get_search_service),
) -> HealthResponse:
    """
    Check the health of the service and its dependencies.

    Check details:
        Database: Executes SELECT 1 to verify connection and query execution
        Search:   SearchService.check_search_health() (real network call)
    """
    db_status = "connected"
    search_status = "available"
    overall = "healthy"

    # ── Check Database ────────────────────────────────────────────────────
    try:
        from edupro.database import engine
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    # ── Check Web Search ──────────────────────────────────────────────────
    search_health = await search_service.check_search_health()
    if not search_health.ok:
        search_status = "unavailable"
        overall = "degraded" if overall != "unhealthy" else overall
        logger.warning("Health check: search unavailable: %s", search_health.error)

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        search=search_status,
        auth_mode=verifier.mode,
        uptime_seconds=round(time.time() - _start_time, 2),
    )

"""
Health check endpoints.
"""

import time

from fastapi import APIRouter

from stockledger.application.dto.responses import HealthResponse, ProviderHealthResponse
from stockledger.config import get_settings

router = APIRouter(prefix="/api/health", tags=["health"])

_start_time = time.time()


def _uptime() -> float:
    return time.time() - _start_time


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness: service status and uptime, no I/O."""
    return HealthResponse(
        status="healthy",
        version=get_settings().app_version,
        uptime_seconds=_uptime(),
    )


@router.get("/db", response_model=HealthResponse)
async def db_health() -> HealthResponse:
    """
    Database readiness.

    Round-trips the pool and reports the applied schema version.
    """
    from stockledger.infrastructure.storage.sqlite import get_connection
    from stockledger.infrastructure.storage.sqlite.migrations import get_current_version

    schema_version = None
    start = time.perf_counter()
    try:
        async with get_connection() as conn:
            schema_version = await get_current_version(conn)
        database = ProviderHealthResponse(
            name="sqlite",
            available=True,
            latency_ms=(time.perf_counter() - start) * 1000,
        )
    except Exception as e:
        database = ProviderHealthResponse(name="sqlite", available=False, error=str(e))

    return HealthResponse(
        status="healthy" if database.available and schema_version else "unhealthy",
        version=get_settings().app_version,
        uptime_seconds=_uptime(),
        database=database,
        schema_version=schema_version,
    )

"""
Health check endpoints.
"""

import time

from fastapi import APIRouter

from foodworks import __version__
from foodworks.application.dto.responses import HealthResponse, ProviderHealthResponse

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check.

    Returns service status and uptime.
    """
    return HealthResponse(
        status="healthy",
        version=__version__,
        uptime_seconds=time.time() - _start_time,
    )


@router.get("/db", response_model=HealthResponse)
async def db_health() -> HealthResponse:
    """
    Database health check.

    Tests SQLite connectivity and reports the applied schema version.
    """
    from foodworks.infrastructure.storage.sqlite import get_connection_pool
    from foodworks.infrastructure.storage.sqlite.migrations.migrator import (
        get_current_version,
    )

    schema_version = None
    try:
        pool = await get_connection_pool()
        latency = await pool.ping()
        async with pool.acquire() as conn:
            schema_version = await get_current_version(conn)

        db_status = ProviderHealthResponse(
            name="sqlite",
            available=True,
            latency_ms=latency,
        )

    except Exception as e:
        db_status = ProviderHealthResponse(
            name="sqlite",
            available=False,
            error=str(e),
        )

    return HealthResponse(
        status="healthy" if db_status.available else "unhealthy",
        version=__version__,
        uptime_seconds=time.time() - _start_time,
        database=db_status,
        schema_version=schema_version,
    )

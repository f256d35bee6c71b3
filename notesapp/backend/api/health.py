"""
Health Check Endpoints.

- /health: Liveness check (process running)
- /health/ready: Readiness check (database reachable)
"""

import asyncio
from typing import Any

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text

from notesapp.backend.core.config import get_app_config
from notesapp.backend.core.database import get_session_factory
from notesapp.backend.core.logging import get_logger
from notesapp.backend.core.utils import elapsed_ms, utc_now

router = APIRouter()
logger = get_logger(__name__)


async def check_database() -> dict[str, Any]:
    """
    Check database connectivity with a trivial query.

    Returns:
        Dict with status, latency, and optional error message
    """
    start = utc_now()
    try:
        async with get_session_factory()() as session:
            await session.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning("Database health check failed", extra={"error": str(e)})
        return {"status": "unhealthy", "error": str(e)}

    latency_ms = elapsed_ms(start)
    return {"status": "healthy", "latency_ms": latency_ms}


@router.get("/health")
async def health_check() -> dict[str, str]:
    """
    Liveness check.

    Returns 200 if the process is running. No dependency checks.
    """
    return {"status": "healthy"}


@router.get("/health/ready", response_model=None)
async def readiness_check() -> dict[str, Any] | JSONResponse:
    """
    Readiness check.

    Returns 200 when the database answers within the configured timeout,
    503 otherwise.
    """
    timeout = get_app_config().application.timeouts.database

    try:
        async with asyncio.timeout(timeout):
            db_result = await check_database()
    except TimeoutError:
        db_result = {"status": "unhealthy", "error": f"timed out after {timeout}s"}

    body = {
        "status": db_result["status"],
        "checks": {"database": db_result},
        "timestamp": utc_now().isoformat(),
    }

    if db_result["status"] != "healthy":
        logger.warning("Readiness check failed", extra={"checks": body["checks"]})
        return JSONResponse(status_code=503, content=body)

    return body

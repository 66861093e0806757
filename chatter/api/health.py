# 📄 File: chatter/api/health.py
# 🧭 Purpose (Layman Explanation):
# Endpoints that say whether Chatter is up and whether it can still talk to its database.
# 🧪 Purpose (Technical Summary):
# Liveness (/health) and dependency-aware readiness (/health/detailed) endpoints; the detailed
# check pings MongoDB through the connection manager kept on ``app.state``.
# 🔗 Dependencies:
# FastAPI, chatter.shared.infrastructure.database.connection
# 🔄 Connected Modules / Calls From:
# chatter.main (router inclusion), load balancers, monitoring systems

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

health_router = APIRouter()

SERVICE_NAME = "chatter-api"


@health_router.get(
    "/health",
    summary="Basic Health Check",
    tags=["Health Check"],
)
async def health_check(request: Request) -> JSONResponse:
    """Quick liveness probe; does not touch the database."""
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": SERVICE_NAME,
            "version": request.app.state.settings.APP_VERSION,
        },
    )


@health_router.get(
    "/health/detailed",
    summary="Detailed Health Check",
    tags=["Health Check"],
)
async def detailed_health_check(request: Request) -> JSONResponse:
    """
    Readiness probe including a MongoDB ping.

    Returns 503 when the database does not answer.
    """
    connection_manager = getattr(request.app.state, "connection_manager", None)
    if connection_manager is None:
        database_health = {
            "status": "unhealthy",
            "error": "MongoDB client not initialized",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
    else:
        database_health = await connection_manager.health_check()

    overall_status = "healthy" if database_health["status"] == "healthy" else "unhealthy"
    if overall_status != "healthy":
        logger.warning(f"Detailed health check failed: {database_health.get('error')}")

    return JSONResponse(
        status_code=status.HTTP_200_OK if overall_status == "healthy" else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": overall_status,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": SERVICE_NAME,
            "version": request.app.state.settings.APP_VERSION,
            "components": {"database": database_health},
        },
    )

"""
Health check router for liveness and readiness probes.
"""
from fastapi import APIRouter, Depends, status

from app.core.errors import GatewayError
from app.database.connections import ConnectionRegistry
from app.dependencies.registry import get_connection_registry

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    status_code=status.HTTP_200_OK,
    summary="Basic health check",
)
async def health_check():
    """
    Basic health check endpoint.
    Returns 200 if the API is running.
    """
    return {"status": "healthy"}


@router.get(
    "/health/ready",
    status_code=status.HTTP_200_OK,
    summary="Readiness check with dependencies",
)
async def readiness_check(
    connections: ConnectionRegistry = Depends(get_connection_registry),
):
    """
    Readiness check that pings every configured database.
    Returns 200 with a per-database status; never includes connection URIs.
    """
    checks = {"api": "healthy"}

    for name in connections.configured_databases():
        try:
            await connections.ping(name)
            checks[name] = "healthy"
        except GatewayError as e:
            checks[name] = f"unhealthy: {e.kind}"

    all_healthy = all(v == "healthy" for v in checks.values())

    return {
        "status": "healthy" if all_healthy else "degraded",
        "checks": checks,
    }

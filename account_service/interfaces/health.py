"""
Health check router.

Provides liveness and readiness endpoints for container probes.
No business logic. Returns application status and version.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from account_service.application.account.upstream import UpstreamHealth
from account_service.core.config import settings
from account_service.domain.account.errors import StoreFailureError
from account_service.domain.account.ports import AccountRepository
from account_service.interfaces.account.dependencies import (
    get_account_repository,
    get_upstream_health,
)
from account_service.interfaces.account.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns application health status and version.",
)
def health_check(
    health: UpstreamHealth = Depends(get_upstream_health),
) -> HealthResponse:
    """Return current application health status."""
    return HealthResponse(
        status="ok",
        version=settings.version,
        degraded=sorted(health.degraded),
    )


@router.get(
    "/health/ready",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
    summary="Readiness check",
    description="Reports whether the account store can be queried.",
)
def readiness_check(
    account_repo: AccountRepository = Depends(get_account_repository),
):
    """Return 503 while the account store is unreachable."""
    try:
        account_repo.list(limit=1)
    except StoreFailureError:
        body = HealthResponse(status="unavailable", version=settings.version)
        return JSONResponse(status_code=503, content=body.model_dump())
    return HealthResponse(status="ok", version=settings.version)

"""
Health Check Route

Liveness probe that also reports whether the reserve tree is populated.
"""

from fastapi import APIRouter, Depends

from api.deps import get_reserve_service
from api.models.responses import HealthResponse
from core.reserve.service import ProofOfReserveService


router = APIRouter(tags=["health"])


def _health(service: ProofOfReserveService) -> HealthResponse:
    return HealthResponse(
        ok=True,
        accounts=len(service.store),
        has_root=service.get_merkle_root() is not None,
    )


@router.get("/health", response_model=HealthResponse)
async def health_check(
    service: ProofOfReserveService = Depends(get_reserve_service),
) -> HealthResponse:
    """Service status plus the number of committed accounts."""
    return _health(service)


@router.get("/", response_model=HealthResponse)
async def root(
    service: ProofOfReserveService = Depends(get_reserve_service),
) -> HealthResponse:
    """Root endpoint - same as health check."""
    return _health(service)

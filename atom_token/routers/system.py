from fastapi import APIRouter

from atom_token.models import HealthCheck
from atom_token.routers.base import ErrorHandlingBaseRoute
from atom_token.utils import utcnow

__all__ = ("router",)


router = APIRouter(
    prefix="/system",
    tags=["system"],
    route_class=ErrorHandlingBaseRoute,
)


@router.get("/health/", response_model=HealthCheck)
async def health_check() -> HealthCheck:
    """Health check endpoint."""
    return HealthCheck(status="healthy", timestamp=utcnow())

"""Health check endpoint."""

from fastapi import APIRouter, Depends

from visitmap import __version__
from visitmap.dependencies import get_visit_log
from visitmap.services.visit_log import VisitLog

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(visit_log: VisitLog = Depends(get_visit_log)) -> dict:
    """Return API health status, version and the number of visits held."""
    return {
        "status": "ok",
        "version": __version__,
        "visits": len(visit_log),
    }

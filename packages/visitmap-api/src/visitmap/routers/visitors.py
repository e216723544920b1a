"""Visitor endpoints - record the caller and expose the visit log."""

import logging

from fastapi import APIRouter, Depends, Request

from visitmap.dependencies import get_visit_log
from visitmap.schemas.visit import VisitMarker, VisitRecord
from visitmap.services.client_location import resolve_client_location
from visitmap.services.geo import build_markers
from visitmap.services.visit_log import VisitLog

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["visitors"])


@router.get("/visitor-ip", response_model=list[VisitRecord])
async def visitor_ip(
    request: Request,
    visit_log: VisitLog = Depends(get_visit_log),
) -> list[VisitRecord]:
    """Record the current visit and return every visit, newest first.

    The caller's address and country come from edge/proxy headers only;
    absent headers yield the ``unknown`` / ``Unknown`` sentinels.
    """
    location = resolve_client_location(request.headers)
    visit = visit_log.record(location.ip, location.country)
    logger.info("Visit from %s (%s) at %s", visit.ip, visit.country, visit.time)
    return visit_log.list_newest_first()


@router.get("/visitor-map", response_model=list[VisitMarker])
async def visitor_map(
    visit_log: VisitLog = Depends(get_visit_log),
) -> list[VisitMarker]:
    """Return per-country map markers for the visits recorded so far.

    Local visits are left off the map. Reading markers does not record a visit.
    """
    return build_markers(visit_log.list_newest_first())

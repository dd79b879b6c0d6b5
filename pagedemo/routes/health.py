"""
pagedemo — Health Check Route
==============================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Checks that every view in the routing table has a template.
Who:   Called by container health checks, load balancers, and monitoring.

Status levels:
    - healthy:   every page view resolves to a template (HTTP 200)
    - degraded:  at least one page would answer 500 (HTTP 200, flagged)
"""

import logging
import time

from fastapi import APIRouter, Request

from pagedemo import __version__
from pagedemo.routes.pages import view_names
from pagedemo.schemas.page import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Initialized once when the module loads
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description=(
        "Returns the health status of the service and whether each page view "
        "can be resolved to a template."
    ),
)
async def health_check(request: Request) -> HealthResponse:
    resolver = request.app.state.view_resolver

    views = {}
    overall = "healthy"
    for name in view_names():
        if resolver.has_view(name):
            views[name] = "available"
        else:
            views[name] = "missing"
            overall = "degraded"
            logger.warning("Health check: template for view '%s' is missing", name)

    return HealthResponse(
        status=overall,
        version=__version__,
        views=views,
        uptime_seconds=round(time.time() - _start_time, 2),
    )

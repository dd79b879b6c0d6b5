"""
pagedemo — Pydantic Schemas
============================

What:  Value types passed between page handlers, the view resolver,
       and the health endpoint.
How:   `ModelAndView` is the return type of every page handler;
       `HealthResponse` is serialized by GET /health.
"""

from typing import Any, Dict

from pydantic import BaseModel, Field


class ModelAndView(BaseModel):
    """
    What:  A logical view identifier plus the model handed to its template.
    Who:   Returned by page handlers, consumed by `ViewResolver.render`.

    Frozen: a handler's result is a fixed value, never mutated downstream.
    """
    view_name: str = Field(min_length=1, description="Logical view identifier, e.g. 'index'")
    model: Dict[str, Any] = Field(
        default_factory=dict,
        description="Template context attributes (empty for the bundled pages)",
    )

    model_config = {"frozen": True}


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and view availability.
    Who:   Returned by GET /health for monitoring and load balancer probes.
    """
    status: str = Field(description="Overall service status: healthy, degraded")
    version: str = Field(description="Application version")
    views: Dict[str, str] = Field(
        description="Per-view template status: available, missing",
    )
    uptime_seconds: float = Field(description="Seconds since service started")

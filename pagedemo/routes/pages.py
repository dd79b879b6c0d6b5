"""
pagedemo — Page Router
=======================

What:  Maps the fixed page paths to fixed logical view identifiers.
How:   An explicit routing table (`PAGE_ROUTES`) of path → pure handler.
       `build_router()` turns the table into a FastAPI router whose
       endpoints hand each handler's ModelAndView to the view resolver.

Routing Table:
    /index  →  index
    /login  →  login

    Every HTTP method is accepted on both paths. Anything else is not
    handled here and gets the framework's 404.
"""

import logging
from types import MappingProxyType
from typing import Callable, List, Mapping

from fastapi import APIRouter, Request
from starlette.responses import HTMLResponse

from pagedemo.schemas.page import ModelAndView
from pagedemo.views import ViewResolver

logger = logging.getLogger(__name__)

PageHandler = Callable[[], ModelAndView]

# Methods registered for each page path
PAGE_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def handle_index() -> ModelAndView:
    return ModelAndView(view_name="index")


def handle_login() -> ModelAndView:
    return ModelAndView(view_name="login")


# Read-only so the table cannot change after import
PAGE_ROUTES: Mapping[str, PageHandler] = MappingProxyType({
    "/index": handle_index,
    "/login": handle_login,
})


def _make_endpoint(handler: PageHandler, resolver: ViewResolver):
    """Adapt a pure page handler into a request endpoint."""

    async def endpoint(request: Request) -> HTMLResponse:
        return resolver.render(request, handler())

    endpoint.__name__ = handler.__name__
    endpoint.__doc__ = handler.__doc__
    return endpoint


def build_router(resolver: ViewResolver) -> APIRouter:
    """
    Build the page router from `PAGE_ROUTES`.

    Pages are HTML, not API operations, so they are left out of the
    OpenAPI schema.
    """
    router = APIRouter(tags=["Pages"])
    for path, handler in PAGE_ROUTES.items():
        router.add_api_route(
            path,
            _make_endpoint(handler, resolver),
            methods=PAGE_METHODS,
            response_class=HTMLResponse,
            include_in_schema=False,
        )
        logger.debug("Registered page route %s → %s", path, handler.__name__)
    return router


def view_names() -> List[str]:
    """Logical view identifiers served by the routing table, in table order."""
    return [handler().view_name for handler in PAGE_ROUTES.values()]

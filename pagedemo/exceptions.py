"""
pagedemo — Custom Exception Hierarchy
======================================

What:  Application-specific exceptions for view resolution failures.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses.
Who:   Raised by the view resolver; caught by global handlers.

Exception Hierarchy:
    PageDemoError (base)                → 500 Internal Server Error
    └── ViewResolutionError             → 500 Internal Server Error
        ├── ViewNotFoundError           → 500 (no template for the view)
        └── ViewRenderError             → 500 (template raised while rendering)

Unknown URL paths are not errors of this application: they fall through
to the framework's default 404 response.
"""

from typing import Any, Dict, Optional


class PageDemoError(Exception):
    """
    Base exception for all pagedemo application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ViewResolutionError(PageDemoError):
    """Raised when a logical view identifier cannot be turned into a response."""

    def __init__(
        self,
        view_name: str,
        message: str = "The requested page could not be rendered",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["view_name"] = view_name
        super().__init__(message=message, context=ctx)
        self.view_name = view_name


class ViewNotFoundError(ViewResolutionError):
    """
    Raised when no template exists for a view identifier.

    The template path goes into `context` only; it is logged server-side
    and never returned to the client.
    """

    def __init__(
        self,
        view_name: str,
        template: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if template:
            ctx["template"] = template
        super().__init__(
            view_name=view_name,
            message=f"View '{view_name}' could not be resolved",
            context=ctx,
        )
        self.template = template


class ViewRenderError(ViewResolutionError):
    """Raised when a template exists but fails while rendering."""

    def __init__(
        self,
        view_name: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            view_name=view_name,
            message=f"View '{view_name}' failed to render",
            context=context,
        )

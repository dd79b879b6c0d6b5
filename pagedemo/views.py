"""
pagedemo — View Resolver
=========================

What:  Turns a logical view identifier into a rendered HTML response.
Why:   Page handlers only name a view; the template location, file suffix
       and rendering engine are concerns of this module alone.
How:   Wraps Starlette's Jinja2Templates. The view identifier plus the
       configured suffix gives the template file name ("login" → "login.html").
Who:   Used by the Page Router endpoints and the health check.

Failure mapping:
    jinja2.TemplateNotFound on lookup   → ViewNotFoundError
    any other jinja2.TemplateError       → ViewRenderError (syntax or render)
    Both surface as HTTP 500 through the global exception handlers.
"""

import logging
from typing import Optional

from fastapi import Request
from fastapi.templating import Jinja2Templates
from jinja2 import TemplateError, TemplateNotFound
from starlette.responses import HTMLResponse

from pagedemo.config import settings
from pagedemo.exceptions import ViewNotFoundError, ViewRenderError
from pagedemo.schemas.page import ModelAndView

logger = logging.getLogger(__name__)

# Response header naming the logical view that produced the body
VIEW_NAME_HEADER = "X-View-Name"


class ViewResolver:
    """
    Resolves and renders view templates from a single directory.

    Stateless apart from the Jinja environment, which caches compiled
    templates and is safe to share across concurrent requests.
    """

    def __init__(self, templates_dir: str, suffix: str = ".html"):
        self.templates_dir = templates_dir
        self.suffix = suffix
        self.templates = Jinja2Templates(directory=templates_dir)

    def template_name(self, view_name: str) -> str:
        return f"{view_name}{self.suffix}"

    def has_view(self, view_name: str) -> bool:
        """True when a template exists for `view_name`. Does not compile it."""
        env = self.templates.env
        try:
            env.loader.get_source(env, self.template_name(view_name))
        except TemplateNotFound:
            return False
        return True

    def render(self, request: Request, model_and_view: ModelAndView) -> HTMLResponse:
        """
        Render the view named by `model_and_view` for `request`.

        The model is passed to the template as its context. The template
        also receives `view_name` so shared layouts can mark the current page.
        """
        view_name = model_and_view.view_name
        template = self.template_name(view_name)

        try:
            self.templates.get_template(template)
        except TemplateNotFound as exc:
            raise ViewNotFoundError(
                view_name,
                template=template,
                context={"templates_dir": self.templates_dir},
            ) from exc
        except TemplateError as exc:
            # Syntax errors surface on first compile
            raise ViewRenderError(
                view_name,
                context={"template": template, "cause": str(exc)},
            ) from exc

        context = dict(model_and_view.model)
        context.setdefault("view_name", view_name)

        try:
            response = self.templates.TemplateResponse(
                request,
                template,
                context,
                headers={VIEW_NAME_HEADER: view_name},
            )
        except TemplateError as exc:
            raise ViewRenderError(
                view_name,
                context={"template": template, "cause": str(exc)},
            ) from exc

        logger.debug("Rendered view '%s' from %s", view_name, template)
        return response


def create_view_resolver(
    templates_dir: Optional[str] = None,
    suffix: Optional[str] = None,
) -> ViewResolver:
    """Build a resolver from explicit arguments, falling back to settings."""
    return ViewResolver(
        templates_dir=templates_dir or settings.templates_dir,
        suffix=settings.template_suffix if suffix is None else suffix,
    )

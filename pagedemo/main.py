"""
pagedemo — FastAPI Application Factory
=======================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn pagedemo.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌──────────┐ ┌─────────────────┐  │
    │  │  Req ID      │→│ Logging  │→│  Rate Limit     │  │
    │  └──────────────┘ └──────────┘ └─────────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌──────────┐ ┌─────────────────┐  │
    │  │ ANY /index   │ │ANY /login│ │ GET /health     │  │
    │  └──────────────┘ └──────────┘ └─────────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ ViewNotFound→500 │ ViewRender→500 │ Any→500  │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from pagedemo import __version__
from pagedemo.config import settings
from pagedemo.exceptions import (
    PageDemoError,
    ViewNotFoundError,
    ViewRenderError,
)
from pagedemo.middleware.logging import RequestLoggingMiddleware
from pagedemo.middleware.rate_limit import RateLimitMiddleware
from pagedemo.middleware.request_id import (
    REQUEST_ID_HEADER,
    RequestIDMiddleware,
    request_id_var,
)
from pagedemo.routes import health, pages
from pagedemo.views import ViewResolver, create_view_resolver

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Called once during app startup, before any other initialization.
    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    # pagedemo.access already logs every request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:
        1. Setup logging
        2. Check that every page view has a template
    Shutdown:
        Nothing to release; log and exit.
    """
    setup_logging()
    logger.info("=" * 60)
    logger.info("pagedemo %s starting up...", __version__)

    resolver = app.state.view_resolver

    try:
        settings.validate_views(
            pages.view_names(),
            templates_dir=resolver.templates_dir,
            suffix=resolver.suffix,
        )
    except ValueError as e:
        # Keep serving: /health reports the problem and the affected
        # pages answer 500 through the exception handlers
        logger.error("Configuration error: %s", str(e))

    logger.info("Templates: %s", resolver.templates_dir)
    for path, handler in pages.PAGE_ROUTES.items():
        logger.info("Page route %s → view '%s'", path, handler().view_name)
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("pagedemo shutting down...")
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        ViewNotFoundError  → 500 (no template for the view)
        ViewRenderError    → 500 (template failed while rendering)
        PageDemoError      → 500 (catch-all for custom errors)
        Exception          → 500 (unexpected errors)

    Unknown paths are left to FastAPI's default 404.
    Responses never include template paths or stack traces; those are
    logged server-side.
    """

    @app.exception_handler(ViewNotFoundError)
    async def handle_view_not_found(request: Request, exc: ViewNotFoundError):
        rid = request_id_var.get("")
        logger.error("[%s] View not found: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "view_not_found",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(ViewRenderError)
    async def handle_view_render_error(request: Request, exc: ViewRenderError):
        rid = request_id_var.get("")
        logger.error("[%s] View render error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "view_render_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(PageDemoError)
    async def handle_app_error(request: Request, exc: PageDemoError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Catch-all: generic 500 body, full stack trace in the log.

        Runs in Starlette's outermost ServerErrorMiddleware, outside
        RequestIDMiddleware, so the ID header is set here. request.state
        shares the ASGI scope with the middleware that stored the ID.
        """
        rid = getattr(request.state, "request_id", "") or request_id_var.get("")
        logger.error(
            "[%s] Unexpected error: %s",
            rid,
            str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again or contact support.",
                "request_id": rid,
            },
            headers={REQUEST_ID_HEADER: rid} if rid else None,
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(view_resolver: Optional[ViewResolver] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        view_resolver: Resolver for page views. Defaults to one built
                       from settings (TEMPLATES_DIR, TEMPLATE_SUFFIX).

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    resolver = view_resolver or create_view_resolver()

    app = FastAPI(
        title="pagedemo",
        description="Serves the index and login pages from a fixed routing table.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.view_resolver = resolver

    # ── Register Middleware ───────────────────────────────────────────────
    # Executes in REVERSE order of addition:
    # RequestID → CORS → Logging → RateLimit → GZip
    # RequestID is outermost so 429s and CORS preflights carry the ID

    # Small pages are not worth compressing
    app.add_middleware(GZipMiddleware, minimum_size=500)

    app.add_middleware(RateLimitMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[
            "X-Request-ID",
            "X-View-Name",
            "Retry-After",
        ],
    )
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(pages.build_router(resolver))
    app.include_router(health.router)

    return app


# uvicorn expects `pagedemo.main:app` to be importable
app = create_app()

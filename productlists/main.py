"""Product Lists API main application module.

This module initializes the FastAPI application and configures
logging, middleware, routers, and startup/shutdown events.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from productlists.api.health import router as health_router
from productlists.api.middleware import setup_middleware
from productlists.api.product_lists import router as product_lists_router
from productlists.infrastructure.config import settings
from productlists.infrastructure.database import engine, init_db, session_factory
from productlists.infrastructure.models import seed_lookups
from productlists.infrastructure.records import RecordNotFoundError

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(message)s",
    stream=sys.stderr,
)
structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    # Startup
    logger.info(
        "Starting Product Lists API",
        version=settings.api_version,
        debug=settings.debug,
    )

    init_db(engine)
    with session_factory.begin() as session:
        seed_lookups(session)

    logger.info(
        "Product list configuration loaded",
        login_required=settings.login_required,
        addition_enabled=settings.addition_enabled,
        template_count=len(settings.list_templates),
        export_enabled=settings.export_enabled,
    )

    yield

    # Shutdown
    engine.dispose()
    logger.info("Shutting down Product Lists API")


app = FastAPI(
    title="Product Lists API",
    description="Wishlists, saved-for-later and request-a-quote lists for storefront customers",
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware (must be added before custom middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Setup custom middleware (request ID, customer session, error handling)
setup_middleware(app)

# Include routers
app.include_router(health_router, tags=["Health"])
app.include_router(product_lists_router)


# ============================================================================
# Custom Exception Handlers
# ============================================================================


@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc: HTTPException):
    """Handle HTTP exceptions with consistent format."""
    request_id = getattr(request.state, "request_id", None)

    detail = exc.detail
    if isinstance(detail, dict):
        error_code = detail.get("error_code", "ERROR")
        message = detail.get("message", str(detail))
        details = detail.get("details", [])
    else:
        error_code = "ERROR"
        message = str(detail)
        details = []

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error_code": error_code,
            "message": message,
            "details": details,
            "request_id": request_id,
        },
        headers=exc.headers,
    )


@app.exception_handler(RecordNotFoundError)
async def record_not_found_handler(request, exc: RecordNotFoundError):
    """Handle loads of record ids that do not exist."""
    request_id = getattr(request.state, "request_id", None)

    return JSONResponse(
        status_code=404,
        content={
            "error_code": "NOT_FOUND",
            "message": exc.message,
            "details": [],
            "request_id": request_id,
        },
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request, exc):
    """Handle uncaught exceptions with consistent format."""
    request_id = getattr(request.state, "request_id", None)

    logger.exception(
        "Unhandled exception in handler",
        path=request.url.path,
        method=request.method,
        error=str(exc),
    )

    return JSONResponse(
        status_code=500,
        content={
            "error_code": "INTERNAL_ERROR",
            "message": "An internal error occurred",
            "details": [],
            "request_id": request_id,
        },
    )

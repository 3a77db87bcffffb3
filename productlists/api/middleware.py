"""API middleware for the product lists service.

Provides:
- Request ID correlation
- Customer session resolution
- Error handling
"""

import time
from typing import Callable
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger()


# ============================================================================
# Request ID Middleware
# ============================================================================


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Middleware to add request ID for correlation.

    Generates or extracts a request ID and adds it to:
    - Request state for access in handlers
    - Response headers for client correlation
    - Log context for tracing
    """

    HEADER_NAME = "X-Request-ID"

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        """Process request with correlation ID.

        Args:
            request: Incoming request.
            call_next: Next middleware/handler.

        Returns:
            Response with request ID header.
        """
        request_id = request.headers.get(self.HEADER_NAME) or str(uuid4())
        request.state.request_id = request_id

        structlog.contextvars.bind_contextvars(request_id=request_id)

        start_time = time.perf_counter()
        response = None

        try:
            response = await call_next(request)
        finally:
            duration_ms = (time.perf_counter() - start_time) * 1000

            logger.info(
                "Request completed",
                method=request.method,
                path=request.url.path,
                status_code=getattr(response, "status_code", 500),
                duration_ms=round(duration_ms, 2),
            )

            structlog.contextvars.unbind_contextvars("request_id")

        response.headers[self.HEADER_NAME] = request_id

        return response


# ============================================================================
# Customer Session Middleware
# ============================================================================


class CustomerSessionMiddleware(BaseHTTPMiddleware):
    """Resolve the logged-in customer from the ``X-Customer-Id`` header.

    A missing header means a guest session; a header that is not an
    integer id is rejected.
    """

    HEADER_NAME = "X-Customer-Id"

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        """Store the customer id on the request state.

        Args:
            request: Incoming request.
            call_next: Next middleware/handler.

        Returns:
            Response or 400 error.
        """
        raw = request.headers.get(self.HEADER_NAME)
        customer_id: int | None = None

        if raw:
            try:
                customer_id = int(raw)
            except ValueError:
                logger.warning(
                    "Invalid customer header",
                    path=request.url.path,
                    method=request.method,
                )
                return JSONResponse(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    content={
                        "error_code": "INVALID_CUSTOMER",
                        "message": f"{self.HEADER_NAME} must be an integer customer id",
                        "details": [],
                        "request_id": getattr(request.state, "request_id", None),
                    },
                )

        request.state.customer_id = customer_id

        return await call_next(request)


# ============================================================================
# Error Handling Middleware
# ============================================================================


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Middleware for consistent error handling.

    Catches unhandled exceptions and returns standardized error responses.
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        """Handle errors uniformly.

        Args:
            request: Incoming request.
            call_next: Next middleware/handler.

        Returns:
            Response or error response.
        """
        try:
            return await call_next(request)
        except Exception as e:
            request_id = getattr(request.state, "request_id", None)

            logger.exception(
                "Unhandled exception",
                path=request.url.path,
                method=request.method,
                error=str(e),
            )

            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "error_code": "INTERNAL_ERROR",
                    "message": "An internal error occurred",
                    "details": [],
                    "request_id": request_id,
                },
            )


# ============================================================================
# Middleware Setup
# ============================================================================


def setup_middleware(app: FastAPI) -> None:
    """Configure all middleware for the application.

    Middleware is added in reverse order (last added = first executed).

    Args:
        app: FastAPI application instance.
    """
    # Error handling (innermost, wraps the handlers)
    app.add_middleware(ErrorHandlerMiddleware)

    # Customer session
    app.add_middleware(CustomerSessionMiddleware)

    # Request ID correlation (outermost, so every response carries the header)
    app.add_middleware(RequestIdMiddleware)

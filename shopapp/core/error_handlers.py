# shopapp/core/error_handlers.py

from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from slowapi.errors import RateLimitExceeded
import logging
import traceback
import uuid

from .exceptions import ShopError, ErrorCode

logger = logging.getLogger(__name__)

def setup_error_handlers(app: FastAPI):
    """Set up global error handlers for the FastAPI application."""

    @app.exception_handler(ShopError)
    async def shop_error_handler(request: Request, exc: ShopError):
        """Handle domain errors raised by the services."""

        log = logger.error if exc.status_code >= 500 else logger.warning
        log(
            f"Shop Error: {exc.code.value}: {exc.user_message}",
            extra={
                "error_code": exc.code.value,
                "context": exc.context,
                "request_url": str(request.url),
                "request_method": request.method,
            }
        )

        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_response()
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle Pydantic validation errors with better formatting."""

        errors = []
        for error in exc.errors():
            field_path = " -> ".join(str(loc) for loc in error["loc"])
            errors.append({
                "field": field_path,
                "message": error["msg"],
                "type": error["type"],
            })

        logger.warning(
            "Validation error",
            extra={
                "validation_errors": errors,
                "request_url": str(request.url),
                "request_method": request.method
            }
        )

        return JSONResponse(
            status_code=422,
            content=jsonable_encoder({
                "error": {
                    "code": "VALIDATION_ERROR",
                    "message": "Request validation failed",
                    "details": errors
                }
            })
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """Handle standard HTTP exceptions with consistent format."""

        logger.warning(
            f"HTTP Exception: {exc.status_code}",
            extra={
                "status_code": exc.status_code,
                "detail": exc.detail,
                "request_url": str(request.url),
                "request_method": request.method
            }
        )

        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": {
                    "code": f"HTTP_{exc.status_code}",
                    "message": exc.detail,
                    "context": {}
                }
            },
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
        return JSONResponse(
            status_code=429,
            content={
                "error": {
                    "code": ErrorCode.RATE_LIMIT_EXCEEDED.value,
                    "message": "Too many requests. Please try again later.",
                    "context": {"limit": str(exc.detail)}
                }
            }
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle all other exceptions with proper logging."""

        logger.error(
            f"Unhandled exception: {type(exc).__name__}: {str(exc)}",
            extra={
                "exception_type": type(exc).__name__,
                "request_url": str(request.url),
                "request_method": request.method,
                "traceback": traceback.format_exc()
            }
        )

        # Don't expose internal details
        return JSONResponse(
            status_code=500,
            content={
                "error": {
                    "code": ErrorCode.INTERNAL_SERVER_ERROR.value,
                    "message": "An internal server error occurred. Please try again later.",
                    "context": {}
                }
            }
        )

# Middleware for request ID tracking
async def add_request_id_middleware(request: Request, call_next):
    """Add request ID for better error tracking."""
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id

    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response

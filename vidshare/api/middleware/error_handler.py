"""
Error Handler Middleware

Global exception handling for the API.

Provides consistent error responses across all endpoints by catching
exceptions and converting them to standardized JSON responses.

Error Response Format:
======================
    {
        "error": {
            "code": "NOT_FOUND",
            "message": "Video with id 'abc-123' not found",
            "details": {}
        }
    }

Exception Handling:
===================
1. VidShareException subclasses → Use their status_code and to_dict()
2. Request / Pydantic validation errors → 400 VALIDATION_ERROR
3. Database connectivity errors → 502 UPSTREAM_FAILURE
4. Other exceptions → 500 with generic message (details hidden)

Usage:
======
    from vidshare.api.middleware.error_handler import setup_exception_handlers

    app = FastAPI()
    setup_exception_handlers(app)
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import DBAPIError

from vidshare.shared.core.exceptions import UpstreamFailureError, VidShareException
from vidshare.shared.core.logging import logger


def _validation_response(errors: list[Any]) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Request validation failed",
                "details": {"errors": jsonable_encoder(errors)},
            }
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Set up global exception handlers.

    Should be called during application initialization to register
    exception handlers for all routes.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(VidShareException)
    async def vidshare_exception_handler(
        request: Request,
        exc: VidShareException,
    ) -> JSONResponse:
        """
        Handle application exceptions.

        All custom exceptions inherit from VidShareException and include:
        - status_code: HTTP status code
        - error_code: Machine-readable error code
        - message: Human-readable message
        - details: Additional context
        """
        logger.warning(
            "Application error",
            error_code=exc.error_code,
            message=exc.message,
            status_code=exc.status_code,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Malformed body, query or form fields."""
        logger.warning("Validation error", errors=exc.errors(), path=request.url.path)
        return _validation_response(exc.errors())

    @app.exception_handler(ValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: ValidationError,
    ) -> JSONResponse:
        """
        Handle Pydantic validation errors.

        These occur when a model is built inside a handler from bad input.
        """
        logger.warning("Validation error", errors=exc.errors(), path=request.url.path)
        return _validation_response(exc.errors())

    @app.exception_handler(DBAPIError)
    async def database_exception_handler(
        request: Request,
        exc: DBAPIError,
    ) -> JSONResponse:
        """
        Handle store-level failures (lost connections, timeouts).

        Uniqueness violations are converted to ConflictError by the services
        before they reach this point. No automatic retry.
        """
        logger.error(
            "Database error",
            error_type=type(exc).__name__,
            path=request.url.path,
            exc_info=True,
        )
        upstream = UpstreamFailureError("database")
        return JSONResponse(
            status_code=upstream.status_code,
            content=upstream.to_dict(),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """
        Handle unexpected exceptions.

        Catches any unhandled exception and returns a generic error.
        Full error details are logged but not exposed to clients.
        """
        logger.error(
            "Unexpected error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                }
            },
        )

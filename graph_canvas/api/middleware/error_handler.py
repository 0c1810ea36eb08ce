"""
Global exception handling middleware.

This is the only place where service errors become HTTP status codes.
"""

import logging
import uuid

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ...utils.constants import REQUEST_ID_HEADER
from ...utils.exceptions import (
    GraphCanvasError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from ...utils.logging_config import request_id_var
from ..models.error import ErrorResponse

logger = logging.getLogger(__name__)


def setup_error_handlers(app: FastAPI):
    """
    Register global exception handlers.

    Handles:
    - ValidationError and request validation errors -> 400
    - NotFoundError -> 404
    - StoreError and unhandled server errors -> 500 (details logged, not returned)
    - HTTP Exceptions (FastAPI/Starlette)
    """

    @app.exception_handler(ValidationError)
    async def graph_validation_handler(request: Request, exc: ValidationError):
        """Handle invalid or missing input detected by the services."""
        details = {"field": exc.field} if exc.field else None
        return _create_error_response(
            status_code=400,
            error="validation_error",
            message=exc.message,
            details=details,
            request_id=getattr(request.state, "request_id", None),
        )

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        """Handle references to nodes or edges that do not exist."""
        return _create_error_response(
            status_code=404,
            error="not_found",
            message=exc.message,
            request_id=getattr(request.state, "request_id", None),
        )

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        """Handle persistence failures without leaking storage details."""
        error_id = uuid.uuid4().hex
        logger.error(f"Store error {error_id}: {exc}", exc_info=exc)
        return _create_error_response(
            status_code=500,
            error="store_error",
            message="The graph store could not complete the request.",
            details={"error_id": error_id},
            request_id=getattr(request.state, "request_id", None),
        )

    @app.exception_handler(GraphCanvasError)
    async def graph_canvas_error_handler(request: Request, exc: GraphCanvasError):
        """Handle any other application error."""
        error_id = uuid.uuid4().hex
        logger.error(f"Application error {error_id}: {exc}", exc_info=exc)
        return _create_error_response(
            status_code=500,
            error="internal_server_error",
            message="An internal server error occurred.",
            details={"error_id": error_id},
            request_id=getattr(request.state, "request_id", None),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle standard HTTP exceptions."""
        return _create_error_response(
            status_code=exc.status_code,
            error=str(exc.status_code),
            message=str(exc.detail),
            request_id=getattr(request.state, "request_id", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle Pydantic validation errors (wrong field types, bad JSON)."""
        return _create_error_response(
            status_code=400,
            error="validation_error",
            message="Request validation failed",
            details={"errors": _jsonable_errors(exc)},
            request_id=getattr(request.state, "request_id", None),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle catch-all unhandled exceptions."""
        error_id = uuid.uuid4().hex
        logger.error(f"Unhandled exception {error_id}: {exc}", exc_info=exc)

        return _create_error_response(
            status_code=500,
            error="internal_server_error",
            message="An internal server error occurred.",
            details={"error_id": error_id},
            request_id=getattr(request.state, "request_id", None),
        )

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next):
        """Tag the request, its log records and its response with a request ID."""
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        token = request_id_var.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def _jsonable_errors(exc: RequestValidationError) -> list:
    """Keep only the JSON-safe parts of pydantic error entries."""
    return [
        {
            "loc": list(error.get("loc", ())),
            "msg": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in exc.errors()
    ]


def _create_error_response(
    status_code: int,
    error: str,
    message: str,
    details: dict = None,
    request_id: str = None,
) -> JSONResponse:
    """Create standardized JSON error response."""
    content = ErrorResponse(
        error=error,
        message=message,
        details=details,
        request_id=request_id,
    ).model_dump(exclude_none=True)

    return JSONResponse(
        status_code=status_code,
        content=content,
    )

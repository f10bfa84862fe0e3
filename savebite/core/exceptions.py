"""Error response model and FastAPI exception handlers.

Every error leaving the API has the shape ``{"error": "<message>"}``.
Request validation problems (malformed JSON bodies, wrong field types,
non-integer path ids) are reported as 400 with an additional ``details`` list.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ErrorDetail(BaseModel):
    """Single validation problem."""

    field: str
    message: str


class ErrorResponse(BaseModel):
    """Error body returned by every failing endpoint."""

    error: str
    details: list[ErrorDetail] | None = None


def _error_response(status_code: int, content: ErrorResponse, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=content.model_dump(exclude_none=True),
        headers=headers,
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the FastAPI application."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
            request: Request,
            exc: StarletteHTTPException,
    ) -> JSONResponse:
        """Render HTTP exceptions as ``{"error": detail}``."""
        return _error_response(
            exc.status_code,
            ErrorResponse(error=str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
            request: Request,
            exc: RequestValidationError,
    ) -> JSONResponse:
        """Report malformed requests as 400."""
        details = [
            ErrorDetail(
                field=".".join(str(loc) for loc in error.get("loc", ())),
                message=error.get("msg", ""),
            )
            for error in exc.errors()
        ]
        return _error_response(
            status.HTTP_400_BAD_REQUEST,
            ErrorResponse(error="Invalid request", details=details),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
            request: Request,
            exc: Exception,
    ) -> JSONResponse:
        """Handle unexpected exceptions without leaking details."""
        logger.exception(f"Unhandled exception on {request.method} {request.url.path}")
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            ErrorResponse(error="Internal server error"),
        )

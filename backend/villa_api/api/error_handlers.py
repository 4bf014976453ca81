"""Error Handlers — global exception handlers rendering every failure as an APIResponse.

Invariants:
    - VillaApiError → its http_status, envelope from to_response()
    - RequestValidationError → 400 envelope with one "<field>: <message>" entry per error
    - HTTPException (routing, method not allowed) → same status, envelope with the detail
    - Exception (catch-all) → 500 envelope, never leaks internal details

Design Decisions:
    - Four-layer handler: domain, validation, HTTP, catch-all
    - Extracted from main.py to keep the entry point import fan-out small
"""

import logging
from http import HTTPStatus

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from villa_api.core.errors import VillaApiError
from villa_api.schemas.api_response import APIResponse

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:
    """Register villa API domain/infrastructure error handler."""

    @app.exception_handler(VillaApiError)
    async def villa_api_error_handler(request: Request, exc: VillaApiError):
        log = logger.warning if exc.http_status < 500 else logger.error
        log(f"{exc.category.value}: {exc.message}", extra=exc.log_extra(path=request.url.path))
        headers = {"WWW-Authenticate": "Bearer"} if exc.http_status == 401 else None
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(), headers=headers,
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_http_error_handler(app: FastAPI) -> None:
    """Register handler for HTTPExceptions raised by routing or routes."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        message = exc.detail if isinstance(exc.detail, str) else HTTPStatus(exc.status_code).phrase
        response = APIResponse().fail(exc.status_code, message)
        return JSONResponse(
            status_code=exc.status_code, content=response.to_wire(),
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all; never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path},
        )
        response = APIResponse().fail(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "An unexpected error occurred",
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=response.to_wire(),
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build the 400 envelope for field-level validation errors."""
    messages = [
        f"{'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}"
        for e in exc.errors()
    ]
    return APIResponse().fail(status.HTTP_400_BAD_REQUEST, *messages).to_wire()

"""Error Handlers: global exception handlers for the User API.

Invariants:
    - UserValidationError → 400 {"errors": [...]} (one message per failed rule)
    - RequestValidationError (malformed JSON) → 400 {"errors": [...]}
    - HTTPException 400 (unparseable body, e.g. an over-long integer) → 400
      {"errors": [detail]}; other HTTPExceptions (404, 405) keep FastAPI's shape
    - Exception (catch-all) → 500 {"error": ...}, never leaks internal details

Design Decisions:
    - Layered handlers: domain (UserValidationError), framework (Pydantic and
      Starlette HTTPException), then catch-all (Exception)
    - GatewayError has no global handler: its status depends on the operation,
      so routes map it through core.map_outcomes.map_failure
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from user_api.core.errors import UserValidationError
from user_api.core.map_outcomes import (
    FailureResponse, internal_error, validation_failed,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_user_validation_handler(app)
    _register_request_validation_handler(app)
    _register_http_exception_handler(app)
    _register_generic_error_handler(app)


def to_json_response(failure: FailureResponse) -> JSONResponse:
    return JSONResponse(status_code=failure.status_code, content=failure.body)


def _register_user_validation_handler(app: FastAPI) -> None:
    """Register handler for payloads rejected by validate_user."""

    @app.exception_handler(UserValidationError)
    async def user_validation_handler(request: Request, exc: UserValidationError):
        logger.info(
            f"Rejected payload on {request.method} {request.url.path}: {exc.violations}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return to_json_response(validation_failed(exc.violations))


def _register_request_validation_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return to_json_response(
            validation_failed([e["msg"] for e in exc.errors()]),
        )


def _register_http_exception_handler(app: FastAPI) -> None:
    """Register handler giving framework-raised 400s the validation envelope."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code != 400:
            return await http_exception_handler(request, exc)
        logger.warning(f"Unreadable body on {request.url.path}: {exc.detail}")
        return to_json_response(validation_failed([str(exc.detail)]))


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return to_json_response(internal_error())

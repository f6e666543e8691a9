"""
API error types and the handlers that render them.

Every failure leaves the service as

    {"error": {"code", "message", "details"?}, "request_id"?, "timestamp"}

Services raise the ``APIError`` subclasses below; anything else that escapes a
route is logged with its stack trace and reported as a generic 500 so internal
details never reach the client.
"""

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .shared.responses import current_timestamp

logger = logging.getLogger(__name__)


class APIError(Exception):
    code = "INTERNAL_SERVER_ERROR"
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, details: Any = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class ValidationError(APIError):
    """Bad input shape, bad coordinates, missing required reason"""

    code = "VALIDATION_ERROR"
    status_code = 400
    default_message = "Validation failed"


class NotFoundError(APIError):
    code = "NOT_FOUND"
    status_code = 404
    default_message = "Resource not found"


class ConflictError(APIError):
    """Illegal state transition, e.g. starting a completed visit"""

    code = "CONFLICT"
    status_code = 400
    default_message = "Operation not allowed in the current state"


class InternalError(APIError):
    pass


def error_body(
    code: str, message: str, request: Request, details: Any = None
) -> dict:
    error = {"code": code, "message": message}
    if details is not None:
        error["details"] = details

    body = {"error": error, "timestamp": current_timestamp()}
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        body["request_id"] = request_id
    return body


def _log_context(request: Request) -> str:
    return f"{request.method} {request.url.path} [{getattr(request.state, 'request_id', '-')}]"


async def api_error_handler(request: Request, exc: APIError):
    if exc.status_code >= 500:
        logger.error(f"{_log_context(request)} - {exc.code}: {exc.message}")
    else:
        logger.warning(f"{_log_context(request)} - {exc.code}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=jsonable_encoder(error_body(exc.code, exc.message, request, exc.details)),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Body/path binding failures are reported as 400 like every other validation error"""
    logger.warning(f"Validation error for {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content=jsonable_encoder(
            error_body("VALIDATION_ERROR", "Validation failed", request, exc.errors())
        ),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    codes = {400: "BAD_REQUEST", 404: "NOT_FOUND", 405: "METHOD_NOT_ALLOWED"}
    code = codes.get(exc.status_code, "HTTP_ERROR")
    message = exc.detail if isinstance(exc.detail, str) else code.replace("_", " ").capitalize()
    return JSONResponse(
        status_code=exc.status_code,
        content=jsonable_encoder(error_body(code, message, request)),
        headers=getattr(exc, "headers", None),
    )


async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(f"{_log_context(request)} - Database error: {exc}")
    return JSONResponse(
        status_code=500,
        content=error_body("DATABASE_ERROR", "Database operation failed", request),
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"{_log_context(request)} - Unhandled error: {exc}")
    return JSONResponse(
        status_code=500,
        content=error_body("INTERNAL_SERVER_ERROR", "Internal server error", request),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

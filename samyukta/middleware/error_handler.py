"""
Error Handler

Turns every failure into the same JSON shape:

    {"error": {"code", "category", "message", "timestamp", "path", ...details}}

Domain errors carry their own status code and details. Database and
unexpected errors are logged with their traceback and reported without
internal text.
"""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from samyukta.core.exceptions import AppError, ErrorCategory

logger = logging.getLogger(__name__)


def _error_body(request: Request, code: str, category: str, message: str, **extra) -> dict:
    return {
        "error": {
            "code": code,
            "category": category,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "path": request.url.path,
            **extra,
        }
    }


def handle_app_error(error: AppError, request: Request) -> JSONResponse:
    """Handle structured application errors"""
    log = logger.error if error.status_code >= 500 else logger.warning
    log(
        f"{error.error_code} on {request.method} {request.url.path}: {error.message}",
        extra={"category": error.category, "details": error.details},
    )

    headers = {}
    if error.status_code == 503:
        headers["Retry-After"] = "30"

    return JSONResponse(
        status_code=error.status_code,
        content=_error_body(
            request, error.error_code, error.category, error.message, **error.details
        ),
        headers=headers,
    )


def handle_validation_error(error: RequestValidationError, request: Request) -> JSONResponse:
    """Handle FastAPI validation errors"""
    errors = [
        {
            "field": ".".join(str(loc) for loc in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in error.errors()
    ]
    logger.warning(f"Validation error on {request.url.path}", extra={"errors": errors})

    # Surface the first message directly, e.g. "Room number required for check-in"
    message = errors[0]["message"].removeprefix("Value error, ") if errors else "Invalid request"
    return JSONResponse(
        status_code=400,
        content=_error_body(
            request,
            "INVALID_INPUT",
            ErrorCategory.VALIDATION,
            message,
            validation_errors=errors,
        ),
    )


HTTP_ERROR_CODES = {
    401: ("NOT_AUTHENTICATED", ErrorCategory.AUTHENTICATION),
    403: ("FORBIDDEN", ErrorCategory.AUTHORIZATION),
    404: ("NOT_FOUND", ErrorCategory.NOT_FOUND),
    405: ("METHOD_NOT_ALLOWED", ErrorCategory.VALIDATION),
    503: ("SERVICE_UNAVAILABLE", ErrorCategory.INTERNAL),
}


def handle_http_error(error: StarletteHTTPException, request: Request) -> JSONResponse:
    """Handle HTTPException raised by routing and auth dependencies"""
    code, category = HTTP_ERROR_CODES.get(
        error.status_code,
        ("HTTP_ERROR", ErrorCategory.INTERNAL if error.status_code >= 500 else ErrorCategory.VALIDATION),
    )
    logger.warning(f"{code} on {request.method} {request.url.path}: {error.detail}")
    return JSONResponse(
        status_code=error.status_code,
        content=_error_body(request, code, category, str(error.detail)),
        headers=getattr(error, "headers", None),
    )


def handle_database_error(error: SQLAlchemyError, request: Request) -> JSONResponse:
    """Handle database errors"""
    is_connection_error = isinstance(error, OperationalError)
    logger.error(
        f"Database error: {type(error).__name__} on {request.url.path}",
        exc_info=True,
    )

    if is_connection_error:
        return JSONResponse(
            status_code=503,
            content=_error_body(
                request,
                "STORE_UNAVAILABLE",
                ErrorCategory.DATABASE,
                "Database connection failed. Please try again.",
            ),
            headers={"Retry-After": "30"},
        )
    return JSONResponse(
        status_code=500,
        content=_error_body(
            request,
            "DATABASE_ERROR",
            ErrorCategory.DATABASE,
            "Database operation failed. Please try again.",
        ),
    )


def handle_unexpected_error(error: Exception, request: Request) -> JSONResponse:
    """Handle unexpected errors"""
    logger.critical(
        f"Unexpected error: {type(error).__name__} on {request.method} {request.url.path}",
        exc_info=True,
    )
    return JSONResponse(
        status_code=500,
        content=_error_body(
            request,
            "INTERNAL_ERROR",
            ErrorCategory.INTERNAL,
            "An unexpected error occurred.",
            error_id=datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S"),
        ),
    )


# Exception handlers for FastAPI
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return handle_app_error(exc, request)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return handle_validation_error(exc, request)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return handle_http_error(exc, request)


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    return handle_database_error(exc, request)


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return handle_unexpected_error(exc, request)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

"""
Domain errors and the exception handlers that turn them into responses.

Every error body has the same shape: {"message": ..., "code": ...}, plus an
"errors" map of field -> messages for validation failures.
"""

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from storelease.vars import MESSAGES

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code = 500
    code = "internal_error"

    def __init__(self, message: str | None = None):
        self.message = message or MESSAGES["internal"]
        super().__init__(self.message)


class InvalidInputError(AppError):
    status_code = 400
    code = "validation_error"

    def __init__(self, message: str | None = None, errors: dict | None = None):
        super().__init__(message or MESSAGES["validation"])
        self.errors = errors


class ConflictError(AppError):
    status_code = 409
    code = "conflict"


class UnauthorizedError(AppError):
    status_code = 401
    code = "unauthorized"


class ForbiddenError(AppError):
    status_code = 403
    code = "forbidden"

    def __init__(self, message: str | None = None):
        super().__init__(message or MESSAGES["forbidden"])


class NotFoundError(AppError):
    status_code = 404
    code = "not_found"


class UpstreamError(AppError):
    status_code = 502
    code = "upstream_failure"

    def __init__(self, message: str | None = None):
        super().__init__(message or MESSAGES["upstream"])


class InvalidCodeError(AppError):
    status_code = 400
    code = "invalid_code"

    def __init__(self, message: str | None = None):
        super().__init__(message or MESSAGES["code_invalid"])


class ExpiredCodeError(AppError):
    status_code = 400
    code = "expired_code"

    def __init__(self, message: str | None = None):
        super().__init__(message or MESSAGES["code_expired"])


def error_body(message: str, code: str, errors: dict | None = None) -> dict:
    body = {"message": message, "code": code}
    if errors is not None:
        body["errors"] = errors
    return body


def _field_name(loc) -> str:
    # locations already carry the wire (alias) names; drop the "body"/"query" prefix
    parts = loc[1:] if len(loc) > 1 else loc
    return ".".join(str(p) for p in parts)


async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error(
            "%s %s failed: %s", request.method, request.url.path, exc.message
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.message, exc.code, getattr(exc, "errors", None)),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = {}
    for err in exc.errors():
        errors.setdefault(_field_name(err.get("loc", ())), []).append(err.get("msg"))
    return JSONResponse(
        status_code=400,
        content=error_body(MESSAGES["validation"], "validation_error", errors),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail), "http_error"),
        headers=getattr(exc, "headers", None),
    )


async def generic_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500, content=error_body(MESSAGES["internal"], "internal_error")
    )

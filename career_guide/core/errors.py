"""
API errors and their JSON rendering.

Every client-visible failure is rendered as:
    {"error": "<message>", "code": "<MACHINE_CODE>"}
with an extra "field" key when a single request field is at fault.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from career_guide.core.config import get_settings

logger = logging.getLogger(__name__)


class ApiError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, code: Optional[str] = None, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.field = field

    def to_dict(self) -> dict:
        body = {"error": self.message, "code": self.code}
        if self.field:
            body["field"] = self.field
        return body


class ValidationError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_ERROR"


class UnauthorizedError(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "UNAUTHORIZED"


class NotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"


class ConflictError(ApiError):
    status_code = status.HTTP_409_CONFLICT
    code = "ALREADY_EXISTS"


def error_response(status_code: int, message: str, code: str, field: Optional[str] = None) -> JSONResponse:
    body = {"error": message, "code": code}
    if field:
        body["field"] = field
    return JSONResponse(status_code=status_code, content=body)


def _debug_enabled(request: Request) -> bool:
    settings = getattr(request.app.state, "settings", None) or get_settings()
    return settings.debug


def _internal_error(request: Request, exc: Exception) -> JSONResponse:
    message = "Internal server error"
    if _debug_enabled(request):
        message = f"{message}: {exc}"
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, message, "INTERNAL_ERROR")


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    if first.get("type") == "json_invalid":
        message = "Request body is not valid JSON"
        logger.info("Rejected request to %s: %s", request.url.path, message)
        return error_response(status.HTTP_400_BAD_REQUEST, message, "VALIDATION_ERROR")

    # Integer parts are list indexes or JSON byte offsets, not field names
    loc = [
        str(part) for part in first.get("loc", ())
        if not isinstance(part, int) and part not in ("body", "query", "header")
    ]
    field = ".".join(loc) or None
    message = first.get("msg", "Invalid request")
    if field:
        message = f"Invalid value for '{field}': {message}"
    logger.info("Rejected request to %s: %s", request.url.path, message)
    return error_response(status.HTTP_400_BAD_REQUEST, message, "VALIDATION_ERROR", field)


async def storage_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("Storage error on %s %s", request.method, request.url.path, exc_info=exc)
    return _internal_error(request, exc)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return _internal_error(request, exc)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, storage_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

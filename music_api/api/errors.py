# ============================================================================
# FILE: music_api/api/errors.py
# Maps every failure onto the {success, message, stack?} envelope
# ============================================================================
import re
import traceback
from typing import Any, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, OperationalError
from starlette.exceptions import HTTPException as StarletteHTTPException

from music_api.core.errors import (
    AppError,
    DuplicateKeyError,
    InvalidInputError,
    MalformedIdError,
    StoreUnavailableError,
)
import logging

logger = logging.getLogger(__name__)

# sqlite: "UNIQUE constraint failed: artists.name"; postgres: "Key (name)=(...)"
_UNIQUE_FIELD_PATTERNS = (
    re.compile(r"UNIQUE constraint failed: \w+\.(\w+)"),
    re.compile(r"Key \((\w+)\)="),
)

_ID_LOCATIONS = {"path", "query"}
_CAST_ERRORS = {"int_parsing", "int_from_float", "int_type"}


def _error_response(request: Request, status_code: int, message: str, exc: Exception) -> JSONResponse:
    body = {"success": False, "message": message}
    settings = getattr(request.app.state, "settings", None)
    if settings is not None and settings.is_development:
        body["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    headers = {"WWW-Authenticate": "Bearer"} if status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(status_code=status_code, content=body, headers=headers)


def _field_name(loc: List[Any]) -> str:
    parts = [str(part) for part in loc]
    if parts and parts[0] in {"body", "query", "path", "header", "cookie"}:
        parts = parts[1:]
    return ".".join(parts)


def validation_error_to_app_error(exc: RequestValidationError) -> AppError:
    """Path and query parameters that fail to parse become MalformedIdError, everything else InvalidInputError"""
    errors = exc.errors()
    for error in errors:
        loc = list(error.get("loc", ()))
        if loc and loc[0] in _ID_LOCATIONS and error.get("type") in _CAST_ERRORS:
            return MalformedIdError(_field_name(loc), error.get("input"))

    messages = []
    for error in errors:
        field = _field_name(list(error.get("loc", ())))
        message = error.get("msg", "Invalid value")
        messages.append(f"{field}: {message}" if field else message)
    return InvalidInputError.from_messages(messages)


def integrity_error_to_app_error(exc: IntegrityError) -> Optional[AppError]:
    text = str(exc.orig) if exc.orig is not None else str(exc)
    for pattern in _UNIQUE_FIELD_PATTERNS:
        match = pattern.search(text)
        if match:
            return DuplicateKeyError(match.group(1))
    return None


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return _error_response(request, exc.status_code, exc.message, exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        error = validation_error_to_app_error(exc)
        return _error_response(request, error.status_code, error.message, exc)

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError):
        error = integrity_error_to_app_error(exc)
        if error is None:
            logger.error(f"Integrity error on {request.method} {request.url.path}: {exc}")
            return _error_response(request, status.HTTP_400_BAD_REQUEST, "Constraint violation", exc)
        return _error_response(request, error.status_code, error.message, exc)

    @app.exception_handler(OperationalError)
    async def store_unavailable_handler(request: Request, exc: OperationalError):
        logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
        error = StoreUnavailableError()
        return _error_response(request, error.status_code, error.message, exc)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
            message = "Endpoint not found"
        else:
            message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        return _error_response(request, exc.status_code, message, exc)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return _error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error", exc)

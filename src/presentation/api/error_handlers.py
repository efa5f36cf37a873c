"""
Exception to HTTP response mapping.

Every error leaves the API in the same body shape:
{timestamp, status, error, message, path, validationErrors?}
"""

from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.domain.exceptions import (CatalogException,
                                   DuplicateResourceException,
                                   ResourceNotFoundException,
                                   ValidationException)
from src.infrastructure.exceptions import StoreConflictException
from src.presentation.api.v1.schemas.common import ErrorResponse
from src.shared.telemetry.logging import get_logger
from src.shared.utils.datetime import utc_now

logger = get_logger(__name__)

# Checked in order; the first matching class wins
STATUS_BY_EXCEPTION: tuple[tuple[type[CatalogException], int], ...] = (
    (ResourceNotFoundException, 404),
    (DuplicateResourceException, 409),
    (ValidationException, 400),
    (StoreConflictException, 409),
)

CONFLICT_MESSAGE = "The request conflicts with a concurrent change; please retry"
INTERNAL_ERROR_MESSAGE = "An unexpected error occurred"

# Request locations that are not part of the field name
_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}


def error_response(
    status_code: int,
    message: str,
    path: str,
    validation_errors: list[str] | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        timestamp=utc_now(),
        status=status_code,
        error=HTTPStatus(status_code).phrase,
        message=message,
        path=path,
        validation_errors=validation_errors,
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True, exclude_none=True),
    )


def status_for(exc: CatalogException) -> int:
    for exc_type, status_code in STATUS_BY_EXCEPTION:
        if isinstance(exc, exc_type):
            return status_code
    return 500


async def catalog_exception_handler(request: Request, exc: CatalogException) -> JSONResponse:
    status_code = status_for(exc)
    if isinstance(exc, StoreConflictException):
        logger.warning("Store conflict on %s: %s", request.url.path, exc.message)
        return error_response(status_code, CONFLICT_MESSAGE, request.url.path)
    if status_code >= 500:
        logger.error("Store failure on %s: %s", request.url.path, exc.message)
        return error_response(status_code, INTERNAL_ERROR_MESSAGE, request.url.path)
    return error_response(status_code, exc.message, request.url.path)


def _format_validation_error(error: dict) -> str:
    field = ".".join(
        str(part) for part in error.get("loc", ()) if part not in _LOCATION_PREFIXES
    )
    message = error.get("msg", "Invalid value")
    return f"{field}: {message}" if field else message


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [_format_validation_error(error) for error in exc.errors()]
    return error_response(400, "Validation failed", request.url.path, errors)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    response = error_response(exc.status_code, str(exc.detail), request.url.path)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning("Unhandled integrity error on %s: %s", request.url.path, exc.orig)
    return error_response(409, CONFLICT_MESSAGE, request.url.path)


async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("Database error on %s: %s", request.url.path, exc)
    return error_response(500, INTERNAL_ERROR_MESSAGE, request.url.path)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s", request.url.path, exc_info=exc)
    return error_response(500, INTERNAL_ERROR_MESSAGE, request.url.path)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CatalogException, catalog_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

"""Exception handlers - the single place where failures become HTTP responses."""
import logging
from typing import Dict, Type

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from city_directory.domain.exceptions import (
    CityDirectoryError,
    CityNotFoundError,
    InvalidCityError,
    MissingFieldError,
    RevisionConflictError,
    StoreUnavailableError,
    TypeMismatchError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: Dict[Type[CityDirectoryError], int] = {
    InvalidCityError: status.HTTP_400_BAD_REQUEST,
    CityNotFoundError: status.HTTP_404_NOT_FOUND,
    MissingFieldError: status.HTTP_404_NOT_FOUND,
    RevisionConflictError: status.HTTP_409_CONFLICT,
    TypeMismatchError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    StoreUnavailableError: status.HTTP_502_BAD_GATEWAY,
}


def status_for(exc: CityDirectoryError) -> int:
    for cls in type(exc).__mro__:
        if cls in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(status_code: int, kind: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": kind, "message": message})


async def handle_city_directory_error(request: Request, exc: CityDirectoryError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc.message}")
    return error_response(status_code, exc.kind, exc.message)


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        location = ".".join(str(part) for part in errors[0].get("loc", ()))
        message = f"{location}: {errors[0].get('msg', 'invalid value')}"
    else:
        message = "Invalid request"
    logger.warning(f"{request.method} {request.url.path} rejected: {message}")
    return error_response(status.HTTP_400_BAD_REQUEST, InvalidCityError.kind, message)


def register_exception_handlers(app: FastAPI):
    """Attach the handlers to ``app``."""
    app.add_exception_handler(CityDirectoryError, handle_city_directory_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from urlshortener.core.exceptions import (
    ConflictError,
    NotFoundError,
    StorageError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _error_body(status_code: int, error: str, message: str, request: Request) -> dict:
    return {
        "status": status_code,
        "error": error,
        "message": message,
        "path": request.url.path,
    }


def _field_errors(errors) -> dict:
    """First message per field, keyed by the last segment of its location."""
    body = {}
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        field = loc[-1] if loc else "body"
        if field not in body:
            body[field] = err.get("msg", "Invalid value").removeprefix("Value error, ")
    body["error"] = "Validation failed"
    return body


async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if any(err.get("type") == "json_invalid" for err in errors):
        logger.warning(f"JSON parse error on {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_body(400, "Bad Request", "Invalid JSON format", request),
        )
    logger.warning(f"Validation error: {errors}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=_field_errors(errors))


async def validation_error_handler(request: Request, exc: ValidationError):
    logger.warning(f"Validation error on {exc.field}: {exc.message}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={exc.field: exc.message, "error": "Validation failed"},
    )


async def not_found_handler(request: Request, exc: NotFoundError):
    logger.warning(f"The requested short URL does not exist. url: {exc.url}")
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"error": "Short code not found", "url": exc.url},
    )


async def conflict_handler(request: Request, exc: ConflictError):
    logger.error(f"Conflict on {exc.field}: {exc.message}")
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"error": exc.message, "field": exc.field},
    )


async def storage_error_handler(request: Request, exc: StorageError):
    logger.error(f"Storage error: {exc.message}", exc_info=exc.__cause__ or exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(500, "Internal Server Error", "An unexpected error occurred", request),
    )


async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(500, "Internal Server Error", "An unexpected error occurred", request),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(ConflictError, conflict_handler)
    app.add_exception_handler(StorageError, storage_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)

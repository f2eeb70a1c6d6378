import logging
from contextlib import contextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from snaphub.utils.response import error_response

logger = logging.getLogger(__name__)


class AppException(Exception):
    status_code = 500

    def __init__(self, message: str, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(AppException):
    status_code = 400


class NotFound(AppException):
    status_code = 404


class StorageError(AppException):
    status_code = 500


class ConflictError(Exception):
    """The document changed since it was read (stale etag)."""


class ConfigurationError(Exception):
    pass


@contextmanager
def storage_failure(message: str):
    """Re-label any StorageError raised inside the block with an operation message."""
    try:
        yield
    except StorageError as exc:
        logger.exception("%s: %s", message, exc.details or exc.message)
        raise StorageError(message, details=exc.details or exc.message) from exc


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response(exc.message, exc.details),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = "; ".join(
            f"{'.'.join(str(p) for p in e['loc'])}: {e['msg']}" for e in exc.errors()
        )
        return JSONResponse(
            status_code=400,
            content=error_response("Invalid request", errors),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content=error_response("Internal server error"),
        )

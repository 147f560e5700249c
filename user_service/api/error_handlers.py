"""Error Handlers — global exception handlers for the user API.

Invariants:
    - ServiceError -> its own http_status with {code, message}
    - RequestValidationError -> 400 INVALID_USER_DATA with the first error's message
    - Exception (catch-all) -> 500 INTERNAL_ERROR_RESPONSE; internal text is logged, never returned

Design Decisions:
    - Three-layer handler: domain (ServiceError), request shape (FastAPI), catch-all (Exception)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from user_service.core.errors import (
    INTERNAL_ERROR_RESPONSE, InvalidUserDataError, ServiceError,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_service_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_service_error_handler(app: FastAPI) -> None:

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        """Handle every classified error."""
        log = logger.error if exc.http_status >= 500 else logger.info
        log(
            f"ServiceError: {exc.message}",
            extra={
                "error_code": exc.code.value,
                "path": request.url.path,
                "method": request.method,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle request-shape errors raised by FastAPI itself."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        error = InvalidUserDataError(describe_first_error(exc))
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error.to_response(),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all; never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path, "method": request.method},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=INTERNAL_ERROR_RESPONSE,
        )


def describe_first_error(exc: RequestValidationError | ValidationError) -> str:
    """First validation error as a single line, prefixed by its field path."""
    errors = exc.errors()
    if not errors:
        return "invalid request data"
    first = errors[0]
    loc = ".".join(str(part) for part in first.get("loc", ()))
    return f"{loc}: {first['msg']}" if loc else first["msg"]

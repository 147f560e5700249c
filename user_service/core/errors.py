"""Error Hierarchy — typed service errors that carry their own HTTP status.

Invariants:
    - Every ServiceError has a code (ErrorCode), message (str), http_status (int)
    - The status is fixed by the subclass at construction, never by the caller
    - to_response() produces the {code, message} envelope and nothing else
    - OperationError is NOT a ServiceError: it always surfaces as a generic 500

Design Decisions:
    - Single hierarchy with ServiceError base: one FastAPI handler catches all
    - Unclassified failures answer with INTERNAL_ERROR_RESPONSE, a fixed payload,
      so storage error text never reaches the client
"""

from user_service.core.domain_types import ErrorCode


class ServiceError(Exception):
    """Base exception for every error with presentation semantics."""

    def __init__(self, message: str, code: ErrorCode, http_status: int = 500):
        super().__init__(message)
        self.message = message
        self.code = code
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the REST error envelope."""
        return {"code": self.code.value, "message": self.message}


# ─── Input Shape Errors (400) ───────────────────────────────────

class InvalidUserIdError(ServiceError):
    """Path identifier is not a UUID."""
    def __init__(self, message: str):
        super().__init__(message, ErrorCode.INVALID_USER_ID, 400)


class InvalidUserDataError(ServiceError):
    """Request body could not be decoded into a DTO."""
    def __init__(self, message: str):
        super().__init__(message, ErrorCode.INVALID_USER_DATA, 400)


# ─── Domain Errors (404, 422) ───────────────────────────────────

class UserValidationError(ServiceError):
    """DTO decoded but a required field is missing or empty."""
    def __init__(self, message: str):
        super().__init__(message, ErrorCode.VALIDATION_ERROR, 422)


class UserNotFoundError(ServiceError):
    """No row for the requested identifier."""
    def __init__(self, message: str = "user not found"):
        super().__init__(message, ErrorCode.NOT_FOUND, 404)


# ─── Internal Errors (500) ──────────────────────────────────────

class InternalServerError(ServiceError):
    """Catch-all classification for failures the caller cannot fix."""
    def __init__(self, message: str = "internal server error"):
        super().__init__(message, ErrorCode.INTERNAL_SERVER_ERROR, 500)


INTERNAL_ERROR_RESPONSE: dict = InternalServerError().to_response()


# ─── Storage Signals (unclassified) ─────────────────────────────

class UserNotExistsError(LookupError):
    """Raised by the repository when a lookup matches zero rows."""


class OperationError(Exception):
    """Unclassified failure wrapped with the operation that produced it."""

    def __init__(self, operation: str, cause: BaseException | None = None):
        detail = f"{operation}: {cause}" if cause is not None else operation
        super().__init__(detail)
        self.operation = operation
        self.cause = cause

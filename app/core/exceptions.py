"""Application-level exceptions and FastAPI exception handlers."""


import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)

class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        code: str = "INTERNAL_ERROR",
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.code = code
        self.details = details
        super().__init__(message)

class NotFoundError(AppException):
    def __init__(self, entity: str, entity_id: str | None = None):
        msg = f"{entity} not found" if not entity_id else f"{entity} '{entity_id}' not found"
        super().__init__(msg, status_code=404, code="NOT_FOUND")

class ForbiddenError(AppException):
    def __init__(self, message: str = "Access denied"):
        super().__init__(message, status_code=403, code="FORBIDDEN")

class UnauthorizedError(AppException):
    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, status_code=401, code="UNAUTHORIZED")

class ConflictError(AppException):
    def __init__(self, message: str):
        super().__init__(message, status_code=409, code="CONFLICT")

class ValidationError(AppException):
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, status_code=422, code="VALIDATION_ERROR", details=details)

class ServiceUnavailableError(AppException):
    """Raised when a dependency (auth service, database) cannot be reached."""

    def __init__(self, message: str = "Service temporarily unavailable"):
        super().__init__(message, status_code=503, code="SERVICE_UNAVAILABLE")

class InternalError(AppException):
    def __init__(self, message: str = "An unexpected error occurred", constraint: str | None = None):
        details = {"constraint": constraint} if constraint else None
        super().__init__(message, status_code=500, code="INTERNAL_ERROR", details=details)

# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

def _error_body(code: str, message: str, details: dict[str, Any] | None = None) -> dict:
    body: dict[str, Any] = {"error": code, "message": message}
    if details:
        body["details"] = details
    return body

def constraint_name(exc: IntegrityError) -> str | None:
    """Best-effort extraction of the violated constraint name from a DBAPI error."""
    orig = exc.orig
    # asyncpg exposes constraint_name on the wrapped exception
    name = getattr(orig, "constraint_name", None) or getattr(
        getattr(orig, "__cause__", None), "constraint_name", None
    )
    if name:
        return name
    text = str(orig)
    # SQLite: "CHECK constraint failed: single_review_reference"
    if "constraint failed:" in text:
        return text.split("constraint failed:", 1)[1].strip() or None
    return None

def register_exception_handlers(app: FastAPI) -> None:
    """Attach all custom exception handlers to the FastAPI app."""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.code, exc.message, exc.details),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = jsonable_encoder(exc.errors())
        fields = [".".join(str(p) for p in err.get("loc", ())[1:]) for err in errors]
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=_error_body(
                "VALIDATION_ERROR",
                "Request validation failed",
                {"fields": fields, "errors": errors},
            ),
        )

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
        name = constraint_name(exc)
        logger.error("Integrity error on %s %s (constraint=%s)", request.method, request.url.path, name)
        err = InternalError("Database constraint violated", constraint=name)
        return JSONResponse(
            status_code=err.status_code,
            content=_error_body(err.code, err.message, err.details),
        )

    @app.exception_handler(404)
    async def not_found_handler(request: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content=_error_body("NOT_FOUND", "Resource not found"),
        )

    @app.exception_handler(500)
    async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content=_error_body("INTERNAL_ERROR", "An unexpected error occurred"),
        )

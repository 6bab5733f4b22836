"""
Application error taxonomy.

Services raise these; handlers registered in `collexa.main` turn them into the
JSON error envelope:

    {"success": false, "message": "...", "errors": [{"field": ..., "message": ...}]}
"""

import logging
from typing import List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"success": False, "message": self.message}


class ValidationError(AppError):
    """Structured per-field validation failure."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Validation Error"

    def __init__(self, errors: List[dict], message: Optional[str] = None):
        super().__init__(message)
        self.errors = errors

    def to_dict(self) -> dict:
        body = super().to_dict()
        body["errors"] = self.errors
        return body


class MissingResume(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Resume file is required (PDF/DOC)"


class InvalidUpload(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Only PDF, DOC, and DOCX files are allowed!"


class UploadTooLarge(AppError):
    status_code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    message = "File too large"


class InvalidStatus(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid status"


class Unauthenticated(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Not authorized"


class AccountDisabled(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Account is deactivated. Please contact support."


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Access denied"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class PostingNotFound(NotFound):
    message = "Posting not found"


class DuplicateConflict(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Duplicate record"


class EmailAlreadyRegistered(DuplicateConflict):
    message = "Email already registered"


class DuplicateApplication(DuplicateConflict):
    message = "You have already applied for this posting"


class DuplicateLead(DuplicateConflict):
    message = "You have already submitted an enquiry. We will contact you soon."


class ServerError(AppError):
    pass


def _field_name(loc) -> str:
    # ("body", "email") -> "email"; ("query", "page") -> "page"
    parts = [str(p) for p in loc if p not in ("body", "query", "path", "form")]
    return ".".join(parts) or "body"


def pydantic_errors_to_fields(errors) -> List[dict]:
    """Flatten pydantic error dicts into the [{field, message}] shape."""
    fields = []
    for err in errors:
        message = err.get("msg", "Invalid value")
        # pydantic prefixes custom ValueErrors with "Value error, "
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        fields.append({"field": _field_name(err.get("loc", ())), "message": message})
    return fields


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    error = ValidationError(pydantic_errors_to_fields(exc.errors()))
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "message": "Server error"},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

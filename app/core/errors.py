"""
=============================================================================
LANDING SUBMISSIONS - ERROR HANDLING MODULE
=============================================================================
Structured submission errors and the global exception handlers.

Every error body has the same shape:

    {"success": false, "code": "<ErrorKind>", "message": "...", "field": "..."}

``code`` is what clients should route on. ``message`` keeps the human
wording the landing page has always displayed (it still contains "valid
email", "email provider", "25MB", "file type"), so older clients matching on
substrings keep working.

Usage:
    # In main.py
    from app.core.errors import register_exception_handlers
    register_exception_handlers(app)
=============================================================================
"""

import logging
import traceback
from enum import Enum
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.config import settings

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again."


class ErrorKind(str, Enum):
    MISSING_FIELDS = "MISSING_FIELDS"
    INVALID_EMAIL_SYNTAX = "INVALID_EMAIL_SYNTAX"
    DISALLOWED_EMAIL_DOMAIN = "DISALLOWED_EMAIL_DOMAIN"
    INVALID_CONTACT_TYPE = "INVALID_CONTACT_TYPE"
    EMAIL_ALREADY_REGISTERED = "EMAIL_ALREADY_REGISTERED"
    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    UNSUPPORTED_FILE_TYPE = "UNSUPPORTED_FILE_TYPE"
    TOO_MANY_FILES = "TOO_MANY_FILES"
    INVALID_REQUEST = "INVALID_REQUEST"
    RATE_LIMITED = "RATE_LIMITED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class SubmissionError(Exception):
    """A rejected submission, rendered as a structured JSON error."""

    def __init__(
        self,
        code: ErrorKind,
        message: str,
        field: Optional[str] = None,
        status_code: int = status.HTTP_400_BAD_REQUEST,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.field = field
        self.status_code = status_code

    def to_payload(self) -> dict:
        payload = {
            "success": False,
            "code": self.code.value,
            "message": self.message,
        }
        if self.field:
            payload["field"] = self.field
        return payload


def internal_error() -> SubmissionError:
    return SubmissionError(
        ErrorKind.INTERNAL_ERROR,
        GENERIC_ERROR_MESSAGE,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the FastAPI app."""

    @app.exception_handler(SubmissionError)
    async def submission_error_handler(request: Request, exc: SubmissionError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.info(
            "Malformed request on %s %s: %s",
            request.method,
            request.url.path,
            exc.errors(),
            extra={"event": "request_malformed", "path": request.url.path},
        )
        error = SubmissionError(ErrorKind.INVALID_REQUEST, "Invalid request body")
        return JSONResponse(status_code=error.status_code, content=error.to_payload())

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Catch-all handler for unhandled exceptions.

        Logs the full traceback and answers with the generic message. In
        debug mode the exception type and text are included.
        """
        logger.error(
            f"Unhandled exception on {request.method} {request.url.path}:\n"
            f"{traceback.format_exc()}"
        )

        content = internal_error().to_payload()
        if settings.DEBUG:
            content["error_type"] = type(exc).__name__
            content["detail"] = str(exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content
        )

"""
Error response schema shared by every endpoint.

Mirrors ``SubmissionError.to_payload()``; used for OpenAPI documentation.
"""
from typing import Optional

from pydantic import BaseModel, Field

from app.core.errors import ErrorKind


class ErrorResponse(BaseModel):
    """
    Standard error response format.

    Attributes:
        success: Always false
        code: Machine-readable error kind, the field clients should route on
        message: Human-readable message, safe to display as-is
        field: Form field the error belongs to, when there is one
    """

    success: bool = False
    code: ErrorKind = Field(..., examples=["INVALID_EMAIL_SYNTAX"])
    message: str = Field(..., examples=["Please enter a valid email address"])
    field: Optional[str] = Field(None, examples=["email"])


ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Validation error"},
    429: {"model": ErrorResponse, "description": "Rate Limit Exceeded"},
    500: {"model": ErrorResponse, "description": "Internal Server Error"},
}

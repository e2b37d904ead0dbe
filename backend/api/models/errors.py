"""
Error response models.

Standardized error responses for the API. Documents the bodies produced
by the exception handlers in ``api.app``.
"""

from pydantic import BaseModel
from typing import Any, Optional


class ErrorResponse(BaseModel):
    """Standard error response format."""

    success: bool = False
    message: str
    error: Optional[str] = None
    details: dict[str, Any] = {}


class FieldError(BaseModel):
    field: str
    message: str


class ValidationErrorResponse(BaseModel):
    """Validation error response format."""

    success: bool = False
    message: str = "Validation failed"
    error: str = "VALIDATION_ERROR"
    errors: list[FieldError]

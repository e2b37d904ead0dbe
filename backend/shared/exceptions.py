"""
Base exception classes for the Agentic backend.

Each module should define its own exceptions that inherit from these bases.
This enables consistent error handling across the application.
"""

from typing import Optional, Any


class AgenticError(Exception):
    """
    Base exception for all Agentic errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "success": False,
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(AgenticError):
    """Resource not found."""

    pass


class ValidationError(AgenticError):
    """Input validation failed."""

    pass


class ConflictError(AgenticError):
    """Resource already exists."""

    pass


class AuthenticationError(AgenticError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class ServiceUnavailableError(AgenticError):
    """A backing store is not reachable and no degraded path applies."""

    def __init__(
        self,
        message: str = "Database connection error. Please try again.",
        code: Optional[str] = "SERVICE_UNAVAILABLE",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)


class ExternalServiceError(AgenticError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service

"""
Authentication module exceptions.

These exceptions are raised by the auth module and caught by the API
error handlers to return appropriate HTTP responses.
"""

from shared.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)


class InvalidTokenError(AuthenticationError):
    """Raised when a JWT token is invalid or malformed."""

    def __init__(self, message: str = "Not authorized, token failed"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    """Raised when a JWT token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class MissingTokenError(AuthenticationError):
    """Raised when no authentication token is provided."""

    def __init__(self, message: str = "Not authorized, no token"):
        super().__init__(message, code="MISSING_TOKEN")


class UserNotFoundError(NotFoundError):
    """Raised when a credential record doesn't exist."""

    def __init__(self, lookup: str, message: str = "User not found"):
        super().__init__(
            message,
            code="USER_NOT_FOUND",
            details={"lookup": lookup},
        )


class DuplicateEmailError(ConflictError):
    """Raised when registering an email that is already taken."""

    def __init__(self, email: str):
        super().__init__(
            "User already exists with this email",
            code="DUPLICATE_EMAIL",
            details={"email": email},
        )


class InvalidCredentialsError(AuthenticationError):
    """
    Raised on failed login.

    Unknown email and wrong password share this error and message.
    """

    def __init__(self):
        super().__init__("Invalid credentials", code="INVALID_CREDENTIALS")


class InvalidResetTokenError(ValidationError):
    """Raised when a reset reference is unknown or expired."""

    def __init__(self):
        super().__init__("Invalid or expired reset token", code="INVALID_RESET_TOKEN")


class IncorrectPasswordError(AuthenticationError):
    """Raised when the current password given to change-password is wrong."""

    def __init__(self):
        super().__init__("Current password is incorrect", code="INCORRECT_PASSWORD")

"""
Authentication module.

Handles registration, login, password reset, session tokens and
principal resolution.

Public API:
- IAuthService: Interface for auth operations
- TokenService: Issues and verifies session tokens
- Request/response models for the auth endpoints
- Auth exceptions: InvalidTokenError, ExpiredTokenError, etc.
"""

from .interfaces import IAuthService, ICredentialRepository
from .tokens import TokenService, DEMO_ID_PREFIX, is_demo_id
from .models import (
    TokenPayload,
    CredentialRecord,
    PublicUser,
    RegisterRequest,
    LoginRequest,
    ForgotPasswordRequest,
    ResetPasswordRequest,
    ChangePasswordRequest,
    AuthResponse,
    ForgotPasswordResponse,
    MessageResponse,
    UserResponse,
)
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    UserNotFoundError,
    DuplicateEmailError,
    InvalidCredentialsError,
    InvalidResetTokenError,
    IncorrectPasswordError,
)

__all__ = [
    # Interfaces
    "IAuthService",
    "ICredentialRepository",
    # Tokens
    "TokenService",
    "DEMO_ID_PREFIX",
    "is_demo_id",
    # Models
    "TokenPayload",
    "CredentialRecord",
    "PublicUser",
    "RegisterRequest",
    "LoginRequest",
    "ForgotPasswordRequest",
    "ResetPasswordRequest",
    "ChangePasswordRequest",
    "AuthResponse",
    "ForgotPasswordResponse",
    "MessageResponse",
    "UserResponse",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "UserNotFoundError",
    "DuplicateEmailError",
    "InvalidCredentialsError",
    "InvalidResetTokenError",
    "IncorrectPasswordError",
]

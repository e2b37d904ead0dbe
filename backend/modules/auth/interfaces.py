"""
Authentication module interfaces.

Other modules should depend on IAuthService, not the concrete implementation.
The service itself depends on ICredentialRepository so it can be tested
against an in-memory store.
"""

from datetime import datetime
from typing import Protocol, Optional, runtime_checkable

from shared.models import Principal

from .models import (
    AuthResponse,
    ChangePasswordRequest,
    CredentialRecord,
    ForgotPasswordResponse,
    LoginRequest,
    MessageResponse,
    PublicUser,
    RegisterRequest,
    ResetPasswordRequest,
)


@runtime_checkable
class ICredentialRepository(Protocol):
    """Persistence contract for credential records."""

    def get_by_id(self, user_id: str) -> Optional[CredentialRecord]: ...

    def get_by_email(self, email: str) -> Optional[CredentialRecord]: ...

    def get_by_reset_token(
        self, token_hash: str, now: datetime
    ) -> Optional[CredentialRecord]: ...

    def create(self, name: str, email: str, password_hash: str) -> CredentialRecord: ...

    def update_password(self, user_id: str, password_hash: str) -> None: ...

    def set_reset_token(
        self, user_id: str, token_hash: str, expires_at: datetime
    ) -> None: ...


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    Every operation has a degraded path used when the credential store
    is unavailable and demo mode is enabled.
    """

    async def register(self, request: RegisterRequest) -> AuthResponse:
        """
        Create an account and issue a session token.

        Raises:
            DuplicateEmailError: If the email is already registered
        """
        ...

    async def login(self, request: LoginRequest) -> AuthResponse:
        """
        Verify credentials and issue a session token.

        Raises:
            InvalidCredentialsError: For unknown email or wrong password alike
        """
        ...

    async def forgot_password(self, email: str) -> ForgotPasswordResponse:
        """
        Create a reset reference valid for a short time.

        Raises:
            UserNotFoundError: If no account has this email
        """
        ...

    async def reset_password(
        self, reset_token: str, request: ResetPasswordRequest
    ) -> AuthResponse:
        """
        Set a new password using a reset reference.

        Raises:
            InvalidResetTokenError: If the reference is unknown or expired
        """
        ...

    async def change_password(
        self, principal: Principal, request: ChangePasswordRequest
    ) -> MessageResponse:
        """
        Change the password of a verified principal.

        Raises:
            ValidationError: If the new password is missing or unacceptable
            IncorrectPasswordError: If the current password is wrong
        """
        ...

    async def get_current_principal(self, principal: Principal) -> PublicUser:
        """Public projection of a verified principal."""
        ...

    async def resolve_principal(self, principal_id: str) -> Principal:
        """
        Load the principal for a verified, non-demo token.

        Raises:
            UserNotFoundError: If the record no longer exists
        """
        ...

    async def logout(self) -> MessageResponse:
        """Acknowledge a logout. Stateless tokens are not revoked."""
        ...

"""
Authentication service implementation.

Registers users, verifies credentials, runs the password reset flow and
resolves token subjects to principals. When the credential store is
unavailable and demo mode is enabled, operations answer with synthetic
identities instead of failing.
"""

import asyncio
import logging
from datetime import datetime, timedelta
from typing import Awaitable, Callable, Optional, TypeVar
from urllib.parse import quote

from shared.config import Settings, get_settings
from shared.database import StoreHandle
from shared.exceptions import ServiceUnavailableError, ValidationError
from shared.models import Principal

from .exceptions import (
    DuplicateEmailError,
    IncorrectPasswordError,
    InvalidCredentialsError,
    InvalidResetTokenError,
    InvalidTokenError,
    UserNotFoundError,
)
from .interfaces import IAuthService, ICredentialRepository
from .models import (
    PASSWORD_MIN_LENGTH,
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
from .passwords import (
    generate_reset_token,
    hash_password,
    hash_reset_token,
    verify_password,
)
from .tokens import (
    DEMO_EMAIL,
    DEMO_NAME,
    TokenService,
    is_demo_id,
    new_demo_id,
    utc_now,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Dependencies are injected: the credential repository, the token
    service and the store handle that decides between the real and the
    degraded path.
    """

    def __init__(
        self,
        repository: ICredentialRepository,
        tokens: TokenService,
        store: StoreHandle,
        settings: Optional[Settings] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._repo = repository
        self._tokens = tokens
        self._store = store
        self._settings = settings or get_settings()
        self._clock = clock

    # -------------------------------------------------------------------------
    # Public operations
    # -------------------------------------------------------------------------

    async def register(self, request: RegisterRequest) -> AuthResponse:
        email = request.email.lower()
        return await self._with_demo_fallback(
            "registering",
            lambda: self._register(request, email),
            lambda: self._demo_register(request, email),
        )

    async def login(self, request: LoginRequest) -> AuthResponse:
        return await self._with_demo_fallback(
            "logging in",
            lambda: self._login(request),
            lambda: self._demo_login(request),
        )

    async def forgot_password(self, email: str) -> ForgotPasswordResponse:
        return await self._with_demo_fallback(
            "issuing reset reference",
            lambda: self._forgot_password(email),
            lambda: self._demo_forgot_password(email),
        )

    async def reset_password(
        self, reset_token: str, request: ResetPasswordRequest
    ) -> AuthResponse:
        return await self._with_demo_fallback(
            "resetting password",
            lambda: self._reset_password(reset_token, request),
            lambda: self._demo_reset_password(request),
        )

    async def change_password(
        self, principal: Principal, request: ChangePasswordRequest
    ) -> MessageResponse:
        self._validate_password_change(request)

        if principal.is_demo:
            return MessageResponse(message="Password changed successfully (Demo Mode)")

        if not self._store.is_available():
            raise ServiceUnavailableError()

        record = self._repo.get_by_id(principal.id)
        if record is None:
            raise UserNotFoundError(principal.id)

        if not await self._verify(request.current_password, record.password_hash):
            raise IncorrectPasswordError()

        # Outstanding tokens stay valid; they cannot be revoked
        self._repo.update_password(record.id, await self._hash(request.new_password))
        logger.info(f"Password changed for user {record.id}")
        return MessageResponse(message="Password changed successfully")

    async def get_current_principal(self, principal: Principal) -> PublicUser:
        return PublicUser(
            id=principal.id,
            name=principal.name,
            email=principal.email,
            created_at=principal.created_at,
        )

    async def resolve_principal(self, principal_id: str) -> Principal:
        if is_demo_id(principal_id):
            raise InvalidTokenError("Demo identities are not stored")

        if not self._store.is_available():
            raise ServiceUnavailableError("Database not connected")

        record = self._repo.get_by_id(principal_id)
        if record is None:
            raise UserNotFoundError(principal_id)

        return Principal(
            id=record.id,
            name=record.name,
            email=record.email,
            created_at=record.created_at,
        )

    async def logout(self) -> MessageResponse:
        """Tokens are stateless; the client discards its copy."""
        return MessageResponse(message="Logged out successfully")

    # -------------------------------------------------------------------------
    # Store-backed paths
    # -------------------------------------------------------------------------

    async def _register(self, request: RegisterRequest, email: str) -> AuthResponse:
        if self._repo.get_by_email(email) is not None:
            logger.info(f"Registration rejected, email already in use: {email}")
            raise DuplicateEmailError(email)

        password_hash = await self._hash(request.password)
        record = self._repo.create(request.name, email, password_hash)
        logger.info(f"User registered: {record.id}")

        return AuthResponse(
            message="Account created successfully! Welcome to Agentic System.",
            token=self._tokens.issue(record.id),
            user=self._to_public(record),
        )

    async def _login(self, request: LoginRequest) -> AuthResponse:
        record = self._repo.get_by_email(request.email)
        if record is None or not await self._verify(request.password, record.password_hash):
            logger.info("Login failed: invalid credentials")
            raise InvalidCredentialsError()

        logger.info(f"User logged in: {record.id}")
        return AuthResponse(
            message="Login successful",
            token=self._tokens.issue(record.id),
            user=self._to_public(record),
        )

    async def _forgot_password(self, email: str) -> ForgotPasswordResponse:
        record = self._repo.get_by_email(email)
        if record is None:
            raise UserNotFoundError(email, message="No user found with this email")

        reference = generate_reset_token()
        expires_at = self._clock() + timedelta(
            minutes=self._settings.reset_token_expire_minutes
        )
        self._repo.set_reset_token(record.id, hash_reset_token(reference), expires_at)
        logger.info(f"Password reset requested for user {record.id}, expires {expires_at}")

        # Without exposure the reference stays server-side only
        if not self._settings.expose_reset_token:
            return ForgotPasswordResponse(message="Password reset email sent")

        return ForgotPasswordResponse(
            message="Password reset link generated",
            reset_token=reference,
            reset_url=self._reset_url(reference, record.email),
            expires_at=expires_at,
        )

    async def _reset_password(
        self, reset_token: str, request: ResetPasswordRequest
    ) -> AuthResponse:
        if not reset_token:
            raise InvalidResetTokenError()

        record = self._repo.get_by_reset_token(hash_reset_token(reset_token), self._clock())
        if record is None:
            logger.info("Password reset rejected: invalid or expired reference")
            raise InvalidResetTokenError()

        self._repo.update_password(record.id, await self._hash(request.password))
        logger.info(f"Password reset completed for user {record.id}")

        return AuthResponse(
            message="Password reset successful! You can now login with your new password.",
            token=self._tokens.issue(record.id),
            user=self._to_public(record),
        )

    # -------------------------------------------------------------------------
    # Demo paths
    # -------------------------------------------------------------------------

    def _demo_register(self, request: RegisterRequest, email: str) -> AuthResponse:
        demo_id = new_demo_id()
        return AuthResponse(
            message="Account created successfully (Demo Mode)",
            token=self._tokens.issue(demo_id, email=email),
            user=PublicUser(
                id=demo_id,
                name=request.name,
                email=email,
                created_at=self._clock(),
            ),
        )

    def _demo_login(self, request: LoginRequest) -> AuthResponse:
        demo_id = new_demo_id()
        email = request.email or DEMO_EMAIL
        return AuthResponse(
            message="Login successful (Demo Mode - Database not connected)",
            token=self._tokens.issue(demo_id, email=email),
            user=PublicUser(id=demo_id, name=DEMO_NAME, email=email),
        )

    def _demo_forgot_password(self, email: str) -> ForgotPasswordResponse:
        reference = f"demo_reset_token_{int(self._clock().timestamp() * 1000)}"
        return ForgotPasswordResponse(
            message="Password reset email sent (Demo Mode)",
            reset_token=reference,
            reset_url=self._reset_url(reference, email or DEMO_EMAIL),
        )

    def _demo_reset_password(self, request: ResetPasswordRequest) -> AuthResponse:
        demo_id = new_demo_id()
        email = request.email or DEMO_EMAIL
        return AuthResponse(
            message="Password reset successful (Demo Mode)",
            token=self._tokens.issue(demo_id, email=email),
            user=PublicUser(id=demo_id, name=DEMO_NAME, email=email),
        )

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    async def _with_demo_fallback(
        self,
        action: str,
        real: Callable[[], Awaitable[T]],
        demo: Callable[[], T],
    ) -> T:
        """
        Run the store-backed path, or the demo path when the store is down.

        The store counts as down both when the handle reports it unavailable
        up front and when it stops answering part way through ``real``.

        Raises:
            ServiceUnavailableError: If the store is down and demo mode is off
        """
        if self._store.is_available():
            try:
                return await real()
            except ServiceUnavailableError:
                if not self._settings.demo_mode_enabled:
                    raise
        elif not self._settings.demo_mode_enabled:
            raise ServiceUnavailableError()

        logger.warning(f"Credential store unavailable, {action} in demo mode")
        return demo()

    def _validate_password_change(self, request: ChangePasswordRequest) -> None:
        if not (
            request.current_password
            and request.new_password
            and request.confirm_new_password
        ):
            raise ValidationError(
                "Please provide current password, new password, and confirm new password"
            )
        if request.new_password != request.confirm_new_password:
            raise ValidationError("New passwords do not match")
        if request.current_password == request.new_password:
            raise ValidationError("New password must be different from current password")
        if len(request.new_password) < PASSWORD_MIN_LENGTH:
            raise ValidationError(
                f"Password must be at least {PASSWORD_MIN_LENGTH} characters"
            )

    async def _hash(self, password: str) -> str:
        # bcrypt is deliberately slow, keep it off the event loop
        return await asyncio.to_thread(
            hash_password, password, self._settings.password_hash_rounds
        )

    async def _verify(self, password: str, password_hash: str) -> bool:
        return await asyncio.to_thread(verify_password, password, password_hash)

    def _reset_url(self, reference: str, email: str) -> str:
        return (
            f"{self._settings.frontend_url}/reset-password"
            f"?token={reference}&email={quote(email)}"
        )

    @staticmethod
    def _to_public(record: CredentialRecord) -> PublicUser:
        return PublicUser(
            id=record.id,
            name=record.name,
            email=record.email,
            created_at=record.created_at,
        )


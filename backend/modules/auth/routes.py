"""
Auth API endpoints.

Registration, login, the password reset flow and the current user.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_auth_service
from api.models.errors import ErrorResponse, ValidationErrorResponse
from api.middleware.auth import get_current_user
from shared.models import Principal

from .interfaces import IAuthService
from .models import (
    AuthResponse,
    ChangePasswordRequest,
    ForgotPasswordRequest,
    ForgotPasswordResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    ResetPasswordRequest,
    UserResponse,
)

router = APIRouter(
    responses={
        400: {"model": ValidationErrorResponse},
        401: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    }
)


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(
    request: RegisterRequest,
    service: IAuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Create an account and return a session token."""
    return await service.register(request)


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    service: IAuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Exchange email and password for a session token."""
    return await service.login(request)


@router.post("/forgotpassword", response_model=ForgotPasswordResponse)
@router.post("/forgot-password", response_model=ForgotPasswordResponse, include_in_schema=False)
async def forgot_password(
    request: ForgotPasswordRequest,
    service: IAuthService = Depends(get_auth_service),
) -> ForgotPasswordResponse:
    """
    Start a password reset.

    The reset reference expires after a few minutes.
    """
    return await service.forgot_password(request.email)


@router.put("/resetpassword/{reset_token}", response_model=AuthResponse)
async def reset_password(
    reset_token: str,
    request: ResetPasswordRequest,
    service: IAuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Set a new password with a reset reference."""
    return await service.reset_password(reset_token, request)


@router.put("/changepassword", response_model=MessageResponse)
async def change_password(
    request: ChangePasswordRequest,
    user: Principal = Depends(get_current_user),
    service: IAuthService = Depends(get_auth_service),
) -> MessageResponse:
    """Change the signed-in user's password. Requires authentication."""
    return await service.change_password(user, request)


@router.get("/me", response_model=UserResponse)
async def get_me(
    user: Principal = Depends(get_current_user),
    service: IAuthService = Depends(get_auth_service),
) -> UserResponse:
    """Get the current user. Requires authentication."""
    return UserResponse(user=await service.get_current_principal(user))


@router.post("/logout", response_model=MessageResponse)
async def logout(
    service: IAuthService = Depends(get_auth_service),
) -> MessageResponse:
    """Acknowledge a logout. Tokens are stateless, so nothing is revoked."""
    return await service.logout()

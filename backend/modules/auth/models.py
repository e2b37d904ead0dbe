"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

PASSWORD_MIN_LENGTH = 8
NAME_MAX_LENGTH = 50


class TokenPayload(BaseModel):
    """Decoded session token claims."""

    sub: str = Field(..., min_length=1, description="Subject (principal ID)")
    email: Optional[str] = Field(None, description="Email claim (demo tokens)")
    exp: int = Field(..., description="Expiration timestamp")
    iat: int = Field(..., description="Issued at timestamp")


class CredentialRecord(BaseModel):
    """
    A persisted user record.

    Only the auth service mutates these. The password is stored as a bcrypt
    hash and the reset reference as a sha256 hex digest.
    """

    model_config = ConfigDict(extra="forbid")

    id: str
    name: str
    email: str
    password_hash: str
    reset_password_token: Optional[str] = None
    reset_password_expire: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    # Open extension map for forward-compatible attributes
    extra: dict[str, Any] = Field(default_factory=dict)


class PublicUser(BaseModel):
    """Public-safe projection of a user. Never carries the password hash."""

    id: str
    name: str
    email: str
    created_at: Optional[datetime] = None


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------


class RegisterRequest(BaseModel):
    """Request to create an account."""

    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    email: EmailStr
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH)
    confirm_password: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def strip_name(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("name"), str):
            data = {**data, "name": data["name"].strip()}
        return data

    @model_validator(mode="after")
    def passwords_match(self) -> "RegisterRequest":
        if self.confirm_password is not None and self.confirm_password != self.password:
            raise ValueError("Passwords do not match")
        return self


class LoginRequest(BaseModel):
    """Request to sign in."""

    email: str
    password: str


class ForgotPasswordRequest(BaseModel):
    """Request a password reset reference."""

    email: EmailStr


class ResetPasswordRequest(BaseModel):
    """New password presented together with a reset reference."""

    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH)
    email: Optional[str] = None


class ChangePasswordRequest(BaseModel):
    """Change the password of the signed-in user."""

    current_password: Optional[str] = None
    new_password: Optional[str] = None
    confirm_new_password: Optional[str] = None


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    success: bool = True
    message: str


class AuthResponse(BaseModel):
    """Session token plus public user fields."""

    success: bool = True
    message: str
    token: str
    user: PublicUser


class UserResponse(BaseModel):
    """Current user lookup."""

    success: bool = True
    user: PublicUser


class ForgotPasswordResponse(BaseModel):
    """
    Result of a reset request.

    The reference is only included when the server is configured to
    return it directly instead of delivering it out of band.
    """

    success: bool = True
    message: str
    reset_token: Optional[str] = None
    reset_url: Optional[str] = None
    expires_at: Optional[datetime] = None

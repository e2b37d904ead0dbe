"""
Session guard.

FastAPI dependencies that verify the bearer token and attach a Principal.
Demo tokens get a synthetic principal without a store lookup; real tokens
are resolved against the credential store.
"""

import logging
from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from modules.auth.exceptions import MissingTokenError
from modules.auth.interfaces import IAuthService
from modules.auth.tokens import TokenService
from shared.exceptions import AgenticError, AuthenticationError, ServiceUnavailableError
from shared.models import Principal

from ..dependencies import get_auth_service, get_token_service

logger = logging.getLogger(__name__)

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


class AuthError(HTTPException):
    """Authentication error with consistent format."""

    def __init__(self, detail: str, code: str = "UNAUTHORIZED"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"success": False, "message": detail, "error": code},
            headers={"WWW-Authenticate": "Bearer"},
        )


async def authenticate(
    token: Optional[str],
    tokens: TokenService,
    auth: IAuthService,
) -> Principal:
    """
    Turn a raw bearer token into a Principal.

    Raises:
        AuthError: On a missing, invalid or expired token, an unknown user,
            or an unreachable store
    """
    try:
        if not token:
            raise MissingTokenError()

        payload = tokens.verify(token)

        principal = tokens.principal_for(payload)
        if principal is not None:
            return principal

        return await auth.resolve_principal(payload.sub)

    except ServiceUnavailableError:
        raise AuthError("Database not connected", code="STORE_UNAVAILABLE")
    except AuthenticationError as e:
        raise AuthError(e.message, code=e.code)
    except AgenticError as e:
        logger.info(f"Token subject could not be resolved: {e.message}")
        raise AuthError("User not found", code=e.code)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
    auth: IAuthService = Depends(get_auth_service),
) -> Principal:
    """
    Dependency that requires authentication.

    Usage:
        @router.get("/protected")
        async def protected_route(user: Principal = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    token = credentials.credentials if credentials is not None else None
    return await authenticate(token, tokens, auth)


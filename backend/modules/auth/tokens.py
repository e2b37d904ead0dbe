"""
Session token service.

Issues and verifies HS256 JWTs with a fixed lifetime. Verification is
stateless: signature and expiry only. Demo identities (ids prefixed with
``demo_``) are turned into synthetic principals here so they never reach
the credential store.
"""

import time
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt
from pydantic import ValidationError as PydanticValidationError

from shared.models import Principal

from .exceptions import ExpiredTokenError, InvalidTokenError, MissingTokenError
from .models import TokenPayload

DEMO_ID_PREFIX = "demo_"
DEMO_NAME = "Demo User"
DEMO_EMAIL = "demo@agentic.com"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def is_demo_id(principal_id: Optional[str]) -> bool:
    """Whether an id belongs to a synthetic demo identity."""
    return bool(principal_id) and str(principal_id).startswith(DEMO_ID_PREFIX)


def new_demo_id() -> str:
    """Fresh synthetic id, unique enough for demo sessions."""
    return f"{DEMO_ID_PREFIX}{time.time_ns() // 1_000_000}"


class TokenService:
    """
    Signs and verifies session tokens.

    The clock is injectable so expiry can be tested at exact boundaries.
    """

    def __init__(
        self,
        secret: str,
        expires_in: timedelta = timedelta(days=30),
        algorithm: str = "HS256",
        clock: Callable[[], datetime] = utc_now,
    ):
        if not secret:
            raise ValueError("Token secret must be configured")
        self._secret = secret
        self._expires_in = expires_in
        self._algorithm = algorithm
        self._clock = clock

    @property
    def expires_in(self) -> timedelta:
        return self._expires_in

    def issue(self, principal_id: str, email: Optional[str] = None) -> str:
        """
        Issue a signed token for a principal.

        Args:
            principal_id: ID placed in the ``sub`` claim
            email: Optional email claim (used for demo identities)

        Returns:
            Encoded JWT
        """
        if not principal_id:
            raise ValueError("principal_id is required")

        now = self._clock()
        payload = {
            "sub": str(principal_id),
            "iat": int(now.timestamp()),
            "exp": int((now + self._expires_in).timestamp()),
        }
        if email:
            payload["email"] = email
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: Optional[str]) -> TokenPayload:
        """
        Validate signature and expiry and return the claims.

        Raises:
            MissingTokenError: If no token was given
            ExpiredTokenError: If the token expired
            InvalidTokenError: If the token is malformed or badly signed
        """
        if not token:
            raise MissingTokenError()

        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": False, "require": ["sub", "exp", "iat"]},
            )
            payload = TokenPayload(**claims)
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Not authorized, token failed: {e}")
        except PydanticValidationError:
            raise InvalidTokenError()

        # Expiry is checked against the injected clock, not wall time
        if payload.exp <= int(self._clock().timestamp()):
            raise ExpiredTokenError()

        return payload

    def principal_for(self, payload: TokenPayload) -> Optional[Principal]:
        """
        Synthetic principal for demo tokens, None for real ones.

        Real ids must be resolved against the credential store by the caller.
        """
        if not is_demo_id(payload.sub):
            return None
        return Principal(
            id=payload.sub,
            name=DEMO_NAME,
            email=payload.email or DEMO_EMAIL,
            is_demo=True,
        )

"""
Test utilities shared across test modules.

Import with ``from tests.helpers import ...``.
"""

from datetime import datetime, timezone, timedelta
from typing import Optional
from unittest.mock import MagicMock
import uuid

import httpx
import jwt  # PyJWT

from modules.auth.models import CredentialRecord
from modules.auth.tokens import TokenService
from modules.chats.models import ChatMessage, ChatThread
from shared.config import Settings
from shared.database import StoreHandle


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"


def create_test_token(
    user_id: str = "test-user-123",
    email: Optional[str] = None,
    expired: bool = False,
    secret: str = TEST_JWT_SECRET,
) -> str:
    """
    Create a test JWT token for authentication.

    Args:
        user_id: User ID to include in the token
        email: Optional email claim
        expired: If True, creates an expired token
        secret: Signing secret

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "sub": user_id,
        "exp": int(exp.timestamp()),
        "iat": int(now.timestamp()),
    }
    if email:
        payload["email"] = email
    return jwt.encode(payload, secret, algorithm="HS256")


def create_test_settings(**overrides) -> Settings:
    """Settings with a test secret and fast password hashing."""
    values = {
        "jwt_secret": TEST_JWT_SECRET,
        "password_hash_rounds": 4,
        "demo_mode_enabled": True,
        "expose_reset_token": True,
        "frontend_url": "http://localhost:3000",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def available_store() -> StoreHandle:
    """A store handle that reports itself available."""
    return StoreHandle(MagicMock())


def unavailable_store() -> StoreHandle:
    """A store handle with no client (demo mode)."""
    return StoreHandle(None)


def unreachable_client() -> MagicMock:
    """A configured Supabase client whose every query fails to connect."""
    query = MagicMock()
    for method in ("select", "eq", "gt", "order", "limit", "insert", "update", "upsert", "delete"):
        getattr(query, method).return_value = query
    query.execute.side_effect = httpx.ConnectError("Connection refused")

    client = MagicMock()
    client.table.return_value = query
    return client


def create_token_service(**kwargs) -> TokenService:
    return TokenService(secret=TEST_JWT_SECRET, **kwargs)


class InMemoryCredentialRepository:
    """Credential repository backed by a dict, for service tests."""

    def __init__(self) -> None:
        self.records: dict[str, CredentialRecord] = {}

    def get_by_id(self, user_id: str) -> Optional[CredentialRecord]:
        return self.records.get(user_id)

    def get_by_email(self, email: str) -> Optional[CredentialRecord]:
        wanted = email.strip().lower()
        for record in self.records.values():
            if record.email == wanted:
                return record
        return None

    def get_by_reset_token(
        self, token_hash: str, now: datetime
    ) -> Optional[CredentialRecord]:
        for record in self.records.values():
            if (
                record.reset_password_token == token_hash
                and record.reset_password_expire is not None
                and record.reset_password_expire > now
            ):
                return record
        return None

    def create(self, name: str, email: str, password_hash: str) -> CredentialRecord:
        now = datetime.now(timezone.utc)
        record = CredentialRecord(
            id=str(uuid.uuid4()),
            name=name,
            email=email.strip().lower(),
            password_hash=password_hash,
            created_at=now,
            updated_at=now,
        )
        self.records[record.id] = record
        return record

    def update_password(self, user_id: str, password_hash: str) -> None:
        self.records[user_id] = self.records[user_id].model_copy(
            update={
                "password_hash": password_hash,
                "reset_password_token": None,
                "reset_password_expire": None,
            }
        )

    def set_reset_token(
        self, user_id: str, token_hash: str, expires_at: datetime
    ) -> None:
        self.records[user_id] = self.records[user_id].model_copy(
            update={
                "reset_password_token": token_hash,
                "reset_password_expire": expires_at,
            }
        )


def create_thread(
    chat_id: str = "chat-1",
    owner_id: str = "user-123",
    title: str = "Sales analysis",
    texts: tuple[str, ...] = ("Can you analyze the sales data?",),
    last_updated: Optional[datetime] = None,
) -> ChatThread:
    """Helper to create a chat thread."""
    return ChatThread(
        chat_id=chat_id,
        owner_id=owner_id,
        title=title,
        messages=[
            ChatMessage(text=text, is_user=(i % 2 == 0))
            for i, text in enumerate(texts)
        ],
        last_updated=last_updated or datetime.now(timezone.utc),
    )

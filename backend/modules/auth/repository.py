"""
Credential repository for database access.

Encapsulates all Supabase queries and data mapping for the ``users`` table.
Emails are stored lower-cased; the table carries a unique index on email.
"""

from datetime import datetime
from typing import Any, Optional

from postgrest.exceptions import APIError

from shared.repository import BaseRepository
from .exceptions import DuplicateEmailError
from .models import CredentialRecord

USERS_TABLE = "users"
UNIQUE_VIOLATION = "23505"


class CredentialRepository(BaseRepository[CredentialRecord]):
    """
    Repository for credential records.

    Note: This repository does NOT hash or verify anything.
    The auth service is responsible for passwords and reset references.
    """

    def get_by_id(self, user_id: str) -> Optional[CredentialRecord]:
        result = self._execute(self._db.table(USERS_TABLE).select("*").eq("id", user_id))
        if not result.data:
            return None
        return self._map_to_record(result.data[0])

    def get_by_email(self, email: str) -> Optional[CredentialRecord]:
        """Case-insensitive lookup by email."""
        result = self._execute(
            self._db.table(USERS_TABLE)
            .select("*")
            .eq("email", email.strip().lower())
        )
        if not result.data:
            return None
        return self._map_to_record(result.data[0])

    def get_by_reset_token(
        self, token_hash: str, now: datetime
    ) -> Optional[CredentialRecord]:
        """Find the record holding a reset digest that has not expired yet."""
        result = self._execute(
            self._db.table(USERS_TABLE)
            .select("*")
            .eq("reset_password_token", token_hash)
            .gt("reset_password_expire", now.isoformat())
        )
        if not result.data:
            return None
        return self._map_to_record(result.data[0])

    def create(self, name: str, email: str, password_hash: str) -> CredentialRecord:
        """
        Insert a new credential record.

        Raises:
            DuplicateEmailError: If the store's unique index rejects the email
        """
        normalized = email.strip().lower()
        data = {
            "name": name,
            "email": normalized,
            "password_hash": password_hash,
        }
        try:
            result = self._execute(self._db.table(USERS_TABLE).insert(data))
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise DuplicateEmailError(normalized)
            raise
        return self._map_to_record(result.data[0])

    def update_password(self, user_id: str, password_hash: str) -> None:
        """Replace the password hash and clear any pending reset."""
        data = {
            "password_hash": password_hash,
            "reset_password_token": None,
            "reset_password_expire": None,
            "updated_at": self._now_iso(),
        }
        self._execute(self._db.table(USERS_TABLE).update(data).eq("id", user_id))

    def set_reset_token(
        self, user_id: str, token_hash: str, expires_at: datetime
    ) -> None:
        data = {
            "reset_password_token": token_hash,
            "reset_password_expire": expires_at.isoformat(),
            "updated_at": self._now_iso(),
        }
        self._execute(self._db.table(USERS_TABLE).update(data).eq("id", user_id))

    # -------------------------------------------------------------------------
    # Mapping helpers
    # -------------------------------------------------------------------------

    def _map_to_record(self, data: dict[str, Any]) -> CredentialRecord:
        """Map database row to CredentialRecord model."""
        return CredentialRecord(
            id=str(data["id"]),
            name=data["name"],
            email=data["email"],
            password_hash=data["password_hash"],
            reset_password_token=data.get("reset_password_token"),
            reset_password_expire=data.get("reset_password_expire"),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
            extra=data.get("extra") or {},
        )

"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations around a single
StoreHandle, so every service agrees on whether the store is available.
"""

from datetime import timedelta
from typing import TYPE_CHECKING

from shared.config import get_settings
from shared.database import StoreHandle

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import IAuthService
    from modules.auth.repository import CredentialRepository
    from modules.auth.tokens import TokenService
    from modules.chats.interfaces import IChatService
    from modules.chats.repository import ChatRepository


class ServiceContainer:
    """
    Container for all service instances.

    Services are created lazily on first access and cached as singletons
    within the container. Use reset() to clear them for testing.
    """

    def __init__(self) -> None:
        self._store: "StoreHandle | None" = None
        self._token_service: "TokenService | None" = None
        self._credential_repository: "CredentialRepository | None" = None
        self._auth_service: "IAuthService | None" = None
        self._chat_repository: "ChatRepository | None" = None
        self._chat_service: "IChatService | None" = None

    @property
    def store(self) -> StoreHandle:
        """Get the document store handle."""
        if self._store is None:
            self._store = StoreHandle.from_settings()
        return self._store

    @property
    def tokens(self) -> "TokenService":
        """Get the token service instance."""
        if self._token_service is None:
            from modules.auth.tokens import TokenService
            settings = get_settings()
            self._token_service = TokenService(
                secret=settings.jwt_secret,
                expires_in=timedelta(days=settings.jwt_expire_days),
                algorithm=settings.jwt_algorithm,
            )
        return self._token_service

    @property
    def credential_repository(self) -> "CredentialRepository":
        """Get the credential repository instance."""
        if self._credential_repository is None:
            from modules.auth.repository import CredentialRepository
            self._credential_repository = CredentialRepository(self.store)
        return self._credential_repository

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(
                repository=self.credential_repository,
                tokens=self.tokens,
                store=self.store,
            )
        return self._auth_service

    @property
    def chat_repository(self) -> "ChatRepository":
        """Get the chat repository instance."""
        if self._chat_repository is None:
            from modules.chats.repository import ChatRepository
            self._chat_repository = ChatRepository(self.store)
        return self._chat_repository

    @property
    def chats(self) -> "IChatService":
        """Get the chat service instance."""
        if self._chat_service is None:
            from modules.chats.service import ChatService
            self._chat_service = ChatService(
                repository=self.chat_repository,
                store=self.store,
            )
        return self._chat_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._store = None
        self._token_service = None
        self._credential_repository = None
        self._auth_service = None
        self._chat_repository = None
        self._chat_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    The next call to get_container() creates a fresh container.
    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_store() -> StoreHandle:
    """FastAPI dependency for the store handle."""
    return get_container().store


def get_token_service() -> "TokenService":
    """FastAPI dependency for the token service."""
    return get_container().tokens


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_chat_service() -> "IChatService":
    """FastAPI dependency for chat service."""
    return get_container().chats

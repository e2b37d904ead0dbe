"""
Shared infrastructure for the Agentic backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory and store handle
- exceptions: Base exception classes
- log_config: Root logging setup

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import StoreHandle, get_supabase_client, reset_client_cache
from .exceptions import (
    AgenticError,
    NotFoundError,
    ValidationError,
    ConflictError,
    AuthenticationError,
    ServiceUnavailableError,
    ExternalServiceError,
)
from .models import Principal

__all__ = [
    "Settings",
    "get_settings",
    "StoreHandle",
    "get_supabase_client",
    "reset_client_cache",
    "AgenticError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "AuthenticationError",
    "ServiceUnavailableError",
    "ExternalServiceError",
    "Principal",
]

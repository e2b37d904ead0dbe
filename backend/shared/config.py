"""
Centralized configuration for the Agentic backend.

All settings are loaded from environment variables with sensible defaults.
Variables use the AGENTIC_ prefix (e.g., AGENTIC_JWT_SECRET).
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="AGENTIC_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Agentic System API"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 5000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"]
    cors_allow_headers: list[str] = ["*"]

    # Supabase (document store)
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    # Direct PostgreSQL URL, only used by run_migrations.py
    supabase_db_url: str = ""

    # Session tokens
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    jwt_expire_days: int = 30

    # Passwords
    password_hash_rounds: int = 10
    reset_token_expire_minutes: int = 10
    # Returns the reset reference in the response instead of emailing it
    expose_reset_token: bool = True

    # Frontend URLs (for reset links)
    frontend_url: str = "http://localhost:3000"

    # Synthetic success responses when the store is unreachable
    demo_mode_enabled: bool = True
    # Seconds a store that failed at the transport level is treated as down
    store_retry_seconds: float = 5.0

    # Chat persistence client
    api_base_url: str = "http://localhost:5000"
    remote_timeout_seconds: float = 30.0
    local_cache_dir: str = ".agentic_cache"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()

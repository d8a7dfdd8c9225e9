"""
Application configuration settings loaded from environment variables.
Uses pydantic_settings for validation and type conversion.
"""
from typing import List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings class with environment variable validation.

    The signing secret and token lifetime are read once at process start and
    never mutated afterwards.

    Attributes:
        database_url: SQLAlchemy connection string
        secret_key: Shared secret used to sign and verify access tokens
        algorithm: Algorithm used for JWT signing (HS256)
        access_token_expire_minutes: Access token lifetime in minutes
        public_paths: Paths that bypass authentication
        cors_origins: Comma-separated list of allowed CORS origins
        log_level: Root logging level

        # Bootstrap settings (optional)
        bootstrap_tenant_name: Name of the tenant created on first start
        bootstrap_admin_email: Email of the first admin account
        bootstrap_admin_password: Password of the first admin account
    """
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Database settings
    database_url: str = "sqlite:///./dental_clinic.db"

    # JWT settings
    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 1440

    # Request gate
    public_paths: List[str] = [
        "/api/auth/login",
        "/api/health",
        "/health",
        "/docs",
        "/redoc",
        "/openapi.json",
    ]

    # Frontend settings
    cors_origins: str = "http://localhost:3000,http://localhost:5173"

    log_level: str = "INFO"

    # Bootstrap settings (optional - only used when the database has no users)
    bootstrap_tenant_name: str = "Clinica Dental"
    bootstrap_admin_email: Optional[str] = None
    bootstrap_admin_password: Optional[str] = None

    @field_validator("secret_key")
    @classmethod
    def secret_key_length(cls, value: str) -> str:
        # HS256 needs at least 256 bits of key material
        if len(value) < 32:
            raise ValueError("SECRET_KEY must be at least 32 characters long")
        return value

    @property
    def cors_origin_list(self) -> List[str]:
        """Return the configured CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


# Create settings instance
settings = Settings()

"""
Application configuration settings loaded from environment variables.
Uses pydantic_settings for validation and type conversion.
"""
from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings

# Used when JWT_SECRET is not set. Only acceptable for local development.
DEFAULT_JWT_SECRET = "your-secret-key"


class Settings(BaseSettings):
    """
    Application settings class with environment variable validation.

    Attributes:
        database_url: SQLAlchemy connection string
        jwt_secret: Secret used to sign and verify access tokens
        jwt_algorithm: Algorithm used for JWT encoding
        log_level: Root logging level
        cors_origins: Origins allowed by the CORS middleware

        # Bootstrap admin settings (optional)
        bootstrap_admin_username: Username of the first admin account
        bootstrap_admin_password: Password of the first admin account
        bootstrap_admin_email: Email of the first admin account
    """
    # Database settings
    database_url: str = "sqlite:///./hospital_admin.db"

    # JWT settings
    jwt_secret: str = Field(default=DEFAULT_JWT_SECRET)
    jwt_algorithm: str = "HS256"

    # Logging
    log_level: str = "INFO"

    # CORS
    cors_origins: List[str] = ["*"]

    # Bootstrap admin settings (optional - only used for first admin creation)
    bootstrap_admin_username: Optional[str] = None
    bootstrap_admin_password: Optional[str] = None
    bootstrap_admin_email: Optional[str] = None

    class Config:
        """Configuration for environment variables loading"""
        env_file = ".env"
        case_sensitive = False

    @property
    def uses_default_secret(self) -> bool:
        return self.jwt_secret == DEFAULT_JWT_SECRET


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

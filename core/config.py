"""
Centralized configuration management with validation.

All environment variables are loaded and validated here.
This ensures consistent configuration across the application.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Optional
from dotenv import load_dotenv

load_dotenv()


# Passwords that must never reach a production database
_WEAK_DB_PASSWORDS = {"postgres", "password", "changeme", "admin", "root"}


class Settings(BaseSettings):
    """Application settings with validation."""

    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )

    # Full SQLAlchemy URL. When set it wins over the POSTGRES_* fields
    # (tests point this at a throwaway SQLite file).
    DATABASE_URL: Optional[str] = Field(default=None)

    # Database Configuration
    POSTGRES_USER: str = Field(default="postgres")
    POSTGRES_PASSWORD: str = Field(default="postgres")
    POSTGRES_DB: str = Field(default="health_bmi")
    POSTGRES_HOST: str = Field(default="localhost")
    POSTGRES_PORT: int = Field(default=5432)

    # Database Pool Configuration
    DB_POOL_SIZE: int = Field(default=10)
    DB_MAX_OVERFLOW: int = Field(default=0)  # Queue instead of opening extra connections
    DB_POOL_TIMEOUT: int = Field(default=60)
    DB_POOL_RECYCLE: int = Field(default=3600)  # 1 hour

    # libpq sslmode. "require" encrypts without verifying the server certificate;
    # use "verify-full" to also trust-check the server.
    DB_SSL_MODE: str = Field(default="require")

    # API Configuration
    API_HOST: str = Field(default="0.0.0.0")
    API_PORT: int = Field(default=3000)
    API_RELOAD: bool = Field(default=False)
    APP_VERSION: str = Field(default="1.0.0")

    # Logging Configuration
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: str = Field(default="json")  # json or text

    # Environment
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=False)

    # CORS - comma-separated list of allowed origins for production
    # e.g., "https://bmi.example.com,https://www.bmi.example.com"
    CORS_ORIGINS: Optional[str] = Field(default=None)


def validate_production_config(
    environment: str,
    debug: bool,
    cors_origins: Optional[str],
    postgres_password: str,
) -> None:
    """
    Refuse to start a production deployment with unsafe settings.

    Raises:
        ValueError: when any production requirement is not met
    """
    if environment != "production":
        return

    if debug:
        raise ValueError("DEBUG must be False in production")

    if not cors_origins or not cors_origins.strip():
        raise ValueError("CORS_ORIGINS must be set in production")

    if postgres_password.lower() in _WEAK_DB_PASSWORDS or len(postgres_password) < 12:
        raise ValueError("POSTGRES_PASSWORD is too weak for production (12+ chars, not a default)")


# Global settings instance
settings = Settings()

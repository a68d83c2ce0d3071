"""Application configuration via environment variables.

Provides type-safe settings loading using pydantic-settings.
Environment variables can be loaded from a .env file.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings have sensible defaults for development.
    Production deployments MUST set OPERATOR_PASSWORD and SESSION_SECRET.

    Environment Variables:
        DATABASE_URL: SQLAlchemy connection string
        OPERATOR_PASSWORD: Shared operator credential (login disabled when unset)
        SESSION_SECRET: Signing key for operator session cookies (random per
                        process when unset; required in production)
        SESSION_EXPIRE_MINUTES: Operator session lifetime (default 120)
        MAX_UPLOAD_SIZE_BYTES: Upload ceiling (default 10 MiB)
        ALLOWED_MIME_TYPES: JSON list of accepted image media types
        ARTIFACT_BACKEND: "local" or "s3"
        UPLOAD_DIR: Directory for the local artifact backend
        S3_*: Object storage settings for the s3 backend
        LOG_LEVEL: Logging level (default INFO)
        LOG_JSON: Emit JSON log lines (default true)
    """

    # Database
    DATABASE_URL: str = "sqlite:///./art-appraisal.db"

    # Operator access
    OPERATOR_PASSWORD: Optional[str] = None
    SESSION_SECRET: Optional[str] = None
    SESSION_ALGORITHM: str = "HS256"
    SESSION_EXPIRE_MINUTES: int = 120
    SESSION_COOKIE_NAME: str = "operator_session"
    SESSION_COOKIE_SECURE: bool = False

    # Intake
    MAX_UPLOAD_SIZE_BYTES: int = 10 * 1024 * 1024
    ALLOWED_MIME_TYPES: List[str] = ["image/jpeg", "image/png"]
    TOKEN_INSERT_MAX_ATTEMPTS: int = 5

    # Artifact storage
    ARTIFACT_BACKEND: str = "local"
    UPLOAD_DIR: str = "uploads"
    S3_ENDPOINT_URL: Optional[str] = "http://localhost:9000"
    S3_ACCESS_KEY_ID: str = "minioadmin"
    S3_SECRET_ACCESS_KEY: str = "minioadmin"
    S3_BUCKET_NAME: str = "art-appraisal-uploads"
    S3_REGION: str = "us-east-1"
    S3_KEY_PREFIX: str = "uploads"

    # Maintenance
    ORPHAN_GRACE_MINUTES: int = 60

    # Application
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8080"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache for singleton behavior.
    Call get_settings.cache_clear() to reload settings.
    """
    return Settings()

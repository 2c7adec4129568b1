"""Application configuration."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite:///./careerstudio.db"

    # S3/MinIO Storage
    s3_endpoint_url: str = "http://localhost:9000"
    s3_bucket: str = "careerstudio"
    s3_access_key: str = "minioadmin"
    s3_secret_key: str = "minioadmin"
    s3_region: str = "us-east-1"

    # Origin used to resolve path-rooted asset URLs (e.g. "/uploads/...")
    public_base_url: str = "http://localhost:8000"

    # Auth
    secret_key: str = "dev-secret-key-change-in-production"
    access_token_expire_days: int = 7
    bcrypt_rounds: int = 10

    # Application settings
    max_upload_size_mb: int = 5
    max_upload_files: int = 10
    jobs_page_size: int = 9

    # Logging
    log_level: str = "INFO"

    # Derived settings
    @property
    def max_upload_size_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

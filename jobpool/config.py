"""
Configuration management for the Job Pool API.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Database
    database_url: str = ""

    # HTTP
    cors_origins: str = "http://localhost:5173"
    apply_rate_limit: str = "30/minute"
    rate_limit_enabled: bool = True

    # Uploads
    upload_dir: str = "uploads"
    upload_storage: str = "auto"  # auto/memory/disk
    max_upload_size: int = 10 * 1024 * 1024  # 10 MB

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra env vars


settings = Settings()

"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.

The settings object is frozen: it is built once per process and handed to
services explicitly.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # MongoDB
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "collexa"

    # JWT Auth
    jwt_secret_key: str = "change-this-secret"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 7 * 24 * 60
    admin_token_expire_minutes: int = 24 * 60

    # Admin fallback credentials (admin is not stored in the users collection)
    admin_email: str = "admin@collexa.com"
    admin_password: str = "admin123"

    # Email (SMTP)
    smtp_host: str = "smtp.mailtrap.io"
    smtp_port: int = 2525
    smtp_email: str = ""
    smtp_password: str = ""
    from_name: str = "Collexa Support"

    # Frontend origin (CORS + password reset links)
    frontend_url: str = "http://localhost:3000"

    # Resume uploads
    upload_dir: str = "uploads/resumes"
    max_upload_mb: int = 2

    # Password reset
    reset_otp_expire_minutes: int = 60
    forget_password_rate_limit: str = "5/hour"

    # App
    environment: str = "development"
    log_level: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024

    @property
    def smtp_configured(self) -> bool:
        return bool(self.smtp_email and self.smtp_password)

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()

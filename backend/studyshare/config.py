"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

ALLOWED_UPLOAD_TYPES = [
    "application/pdf",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    "application/msword",
    "application/vnd.ms-powerpoint",
]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "StudyShare"
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Sessions
    session_secret: str = "studyshare-session-secret"
    session_algorithm: str = "HS256"
    session_cookie_name: str = "studyshare.sid"
    session_max_age_seconds: int = 7 * 24 * 60 * 60  # 1 week
    session_check_period_seconds: int = 24 * 60 * 60  # prune expired entries daily

    # CORS
    cors_origins: list[str] = ["http://localhost:5173"]

    # Cookies
    # Set to true when frontend and backend are on different domains
    # This uses samesite="none" + secure=True instead of samesite="lax"
    cookie_cross_domain: bool = False

    # Uploads
    uploads_dir: Path = Path("uploads")
    max_upload_size_bytes: int = 10 * 1024 * 1024  # 10MB
    allowed_upload_types: list[str] = ALLOWED_UPLOAD_TYPES

    @property
    def cookie_secure(self) -> bool:
        return self.cookie_cross_domain or self.environment != "development"

    @property
    def cookie_samesite(self) -> Literal["lax", "none"]:
        return "none" if self.cookie_cross_domain else "lax"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def sanitize_error(
    error: Exception,
    *,
    generic_message: str = "An internal error occurred.",
    settings: Settings | None = None,
) -> str:
    """
    Return a user-safe error message.

    In development, returns the full exception string for debugging.
    In staging/production, returns a generic message to avoid leaking internals.
    """
    settings = settings or get_settings()
    if settings.environment == "development":
        return str(error)
    return generic_message

"""Centralized application settings loaded from environment variables."""

from pydantic_settings import BaseSettings
from typing import List
from pathlib import Path


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./member_directory.db"
    SECRET_KEY: str = "change-me-to-a-random-secret-key"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]

    # JWT
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 480

    # Listing
    DEFAULT_PAGE_LIMIT: int = 20
    MAX_PAGE_LIMIT: int = 100

    # Record a timeline entry when an admin flips profile visibility.
    AUDIT_VISIBILITY_CHANGES: bool = False

    # Approval/rejection email collaborator
    NOTIFICATION_ENABLED: bool = False
    NOTIFICATION_WEBHOOK_URL: str = ""
    NOTIFICATION_API_KEY: str = ""
    NOTIFICATION_TIMEOUT_SECONDS: float = 5.0
    NOTIFICATION_MAX_RETRIES: int = 2

    class Config:
        # Load backend/.env regardless of the working directory.
        env_file = str(Path(__file__).resolve().parents[1] / ".env")


settings = Settings()

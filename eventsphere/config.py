"""
Application Configuration
Loads settings from environment variables
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from .env file"""

    # Application
    APP_ENV: str = "development"
    APP_NAME: str = "EventSphere"
    APP_URL: str = "http://localhost:8000"
    DEBUG: bool = True

    # Database
    DATABASE_URL: str = "sqlite:///./eventsphere.db"

    # JWT
    JWT_SECRET_KEY: str = "temp-jwt-secret-change-later"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRATION_HOURS: int = 24 * 7

    # Auth cookie
    AUTH_COOKIE_NAME: str = "auth-token"
    AUTH_COOKIE_SECURE: bool = False

    # Email
    SMTP_HOST: str = "smtp.gmail.com"
    SMTP_PORT: int = 587
    SMTP_USER: Optional[str] = None
    SMTP_PASSWORD: Optional[str] = None
    EMAIL_FROM: str = "noreply@eventsphere.edu"

    # File Upload
    MAX_UPLOAD_SIZE: int = 10485760  # 10MB
    ALLOWED_TEMPLATE_TYPES: str = "image/jpeg,image/png,image/jpg,application/pdf"
    STATIC_DIR: str = "static"
    UPLOAD_SUBDIR: str = "uploads"

    # Storage (Supabase); local disk is used when unset
    SUPABASE_URL: Optional[str] = None
    SUPABASE_KEY: Optional[str] = None
    STORAGE_BUCKET: str = "eventsphere"

    # Event rules
    CHECKIN_WINDOW_HOURS: int = 2
    QR_CODE_MAX_AGE_HOURS: int = 24
    CANCELLATION_CUTOFF_HOURS: int = 24

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "text"  # "text" or "json"

    # CORS
    CORS_ORIGINS: str = "*"

    class Config:
        env_file = ".env"
        case_sensitive = True


# Create global settings instance
settings = Settings()

from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    # -------------------------------------------------
    # General
    # -------------------------------------------------
    PROJECT_NAME: str = "Tenancy Lifecycle API"
    ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # -------------------------------------------------
    # Frontend Domains (CORS)
    # -------------------------------------------------
    FRONTEND_ORIGINS: List[str] = [
        "http://localhost:3000",
    ]

    BACKEND_CORS_ORIGINS: List[str] = []

    # -------------------------------------------------
    # Supabase (DB, Auth & Storage)
    # -------------------------------------------------
    SUPABASE_URL: Optional[str] = Field(None, env="SUPABASE_URL")
    SUPABASE_ANON_KEY: Optional[str] = Field(None, env="SUPABASE_ANON_KEY")
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = Field(None, env="SUPABASE_SERVICE_ROLE_KEY")

    # -------------------------------------------------
    # Storage buckets
    # -------------------------------------------------
    KEY_AREA_PHOTO_BUCKET: str = "move-out-photos"
    DAMAGE_PHOTO_BUCKET: str = "move-out-damage-photos"
    SIGNATURE_BUCKET: str = "move-in-signatures"
    SIGNED_URL_EXPIRY_SECONDS: int = 600

    # -------------------------------------------------
    # Photo limits
    # -------------------------------------------------
    MAX_PHOTOS_PER_CATEGORY: int = 10
    MAX_PHOTO_BYTES: int = 1024 * 1024
    TARGET_PHOTO_BYTES: int = 800 * 1024
    MAX_UPLOAD_BYTES: int = 20 * 1024 * 1024

    # -------------------------------------------------
    # SMTP Email Notifications
    # -------------------------------------------------
    SMTP_HOST: Optional[str] = Field(None, env="SMTP_HOST")
    SMTP_PORT: Optional[int] = Field(None, env="SMTP_PORT")
    SMTP_USER: Optional[str] = Field(None, env="SMTP_USER")
    SMTP_PASS: Optional[str] = Field(None, env="SMTP_PASS")
    SMTP_FROM: Optional[str] = Field(None, env="SMTP_FROM")

    # Comma-separated admin inboxes for lifecycle notifications
    ADMIN_NOTIFY_EMAILS: Optional[str] = Field(None, env="ADMIN_NOTIFY_EMAILS")

    # -------------------------------------------------
    # Webhooks (Slack, Discord, ...)
    # -------------------------------------------------
    NOTIFY_WEBHOOK_URL: Optional[str] = Field(None, env="NOTIFY_WEBHOOK_URL")

    # -------------------------------------------------
    # Model Config
    # -------------------------------------------------
    class Config:
        case_sensitive = True


# Instantiate settings
settings = Settings()

# -------------------------------------------------
# Build CORS list after loading settings
# -------------------------------------------------
settings.BACKEND_CORS_ORIGINS = sorted(
    {origin.rstrip("/") for origin in settings.FRONTEND_ORIGINS}
)

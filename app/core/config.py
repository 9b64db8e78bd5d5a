"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # MongoDB
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "flyAmbitionDB"

    # Server
    host: str = "0.0.0.0"
    port: int = 5000

    # Notification email (Gmail account by default)
    email_user: str = ""
    email_pass: str = ""
    to_email: str = ""
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587

    # Uploaded testimonial images, also served under /uploads
    upload_dir: str = "uploads"

    # App
    log_level: str = "INFO"
    debug: bool = False

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()

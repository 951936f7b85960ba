"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from love_days.domain.media import Owner

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

BYTES_PER_MB = 1024 * 1024


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    data_dir: Path = Path("data")
    uploads_dir: Path = Path("uploads")
    uploads_url_prefix: str = "/uploads"
    max_upload_mb: int = 50
    default_owner: Owner = Owner.TUYEN
    site_name: str = "Ngày Yêu Thương"
    environment: str = _ENVIRONMENT
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def max_upload_bytes(self) -> int:
        """Upper bound for a single stored asset."""
        return self.max_upload_mb * BYTES_PER_MB

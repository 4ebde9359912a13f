"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    bucket_name: str
    key_prefix: str = f"photo-uploader-{os.getenv('USER', 'local')}"
    exif_base_url: str
    exif_timeout_seconds: float = 1.0
    aws_access_key_id: str
    aws_secret_access_key: str
    aws_region: str | None = None
    s3_endpoint_url: str | None = None
    s3_dualstack_enabled: bool = False
    s3_accelerate_mode_enabled: bool = False
    s3_path_style_access_enabled: bool = False
    upload_temp_dir: str | None = None
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


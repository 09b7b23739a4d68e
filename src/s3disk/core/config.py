"""Process-wide settings for s3disk."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Settings read from ``S3DISK_*`` environment variables."""

    log_level: str = "INFO"
    # JSON lines by default; key=value console output when False
    log_json: bool = True

    otel_enabled: bool = False
    otel_service_name: str = "s3disk"

    # Stands in for the host application's timezone; used by last_modified
    timezone: str = "UTC"

    model_config = {
        "env_prefix": "S3DISK_",
        "case_sensitive": False,
    }


settings = Settings()

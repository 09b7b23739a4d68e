"""Disk configuration schemas for s3disk."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from s3disk.core import settings

# Fields that must be non-blank before a disk can be created
REQUIRED_FIELDS = ("key", "secret", "bucket", "url", "endpoint", "timezone")


class DiskConfig(BaseModel):
    """Fully resolved configuration for one object storage disk.

    Blank strings are accepted here so that the factory can report every
    missing field as a single configuration error.

    Example:
        config = DiskConfig(
            key="minioadmin",
            secret="minioadmin",
            bucket="goravel",
            url="http://localhost:9000/goravel",
            endpoint="localhost:9000",
        )
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    disk: str = Field("minio", description="Disk name, used in error messages")
    key: str = Field("", description="Access key ID")
    secret: str = Field("", description="Secret access key")
    region: Optional[str] = Field(None, description="Bucket region")
    bucket: str = Field("", description="Bucket holding the disk")
    url: str = Field("", description="Public base URL of the bucket")
    ssl: bool = Field(False, description="Use TLS when talking to the endpoint")
    endpoint: str = Field("", description="Endpoint host, scheme optional")
    timezone: str = Field(
        default_factory=lambda: settings.timezone,
        description="IANA timezone used for timestamps",
    )

    def missing_fields(self) -> list[str]:
        """Names of required fields that are blank."""
        return [name for name in REQUIRED_FIELDS if not getattr(self, name).strip()]


class DiskSettings(BaseSettings):
    """Disk settings loaded from ``MINIO_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MINIO_",
        case_sensitive=False,
        env_ignore_empty=True,
        extra="ignore",
    )

    access_key_id: str = ""
    access_key_secret: str = ""
    bucket: str = ""
    region: Optional[str] = None
    url: str = ""
    ssl: bool = False
    endpoint: str = ""

    def to_config(
        self, disk: str = "minio", timezone: Optional[str] = None
    ) -> DiskConfig:
        """Build a DiskConfig, taking the timezone from process settings."""
        return DiskConfig(
            disk=disk,
            key=self.access_key_id,
            secret=self.access_key_secret,
            region=self.region,
            bucket=self.bucket,
            url=self.url,
            ssl=self.ssl,
            endpoint=self.endpoint,
            timezone=timezone if timezone is not None else settings.timezone,
        )

"""Construction of disks from configuration."""

from typing import Optional

from s3disk.context import OperationContext
from s3disk.core import get_logger
from s3disk.core.exceptions import ConfigurationError
from s3disk.objectstorage import ObjectStore, S3ClientManager
from s3disk.schemas import DiskConfig, DiskSettings

from .driver import S3Disk

logger = get_logger(__name__)


def create_disk(
    config: DiskConfig, ctx: Optional[OperationContext] = None
) -> S3Disk:
    """Create a disk from a fully resolved configuration.

    Args:
        config: Disk configuration
        ctx: Context bound to every remote call; background if omitted

    Returns:
        A ready to use S3Disk

    Raises:
        ConfigurationError: If a required field is blank
        ConnectionInitError: If the S3 client cannot be created
    """
    ctx = ctx or OperationContext.background()

    missing = config.missing_fields()
    if missing:
        error_msg = f"please set {config.disk} configuration first"
        logger.error(error_msg, disk=config.disk, missing=missing)
        raise ConfigurationError(error_msg)

    client = S3ClientManager(config, ctx).client
    store = ObjectStore(client, config.bucket, ctx)

    logger.info("Disk created", disk=config.disk, bucket=config.bucket)
    return S3Disk(config, store, ctx)


def disk_from_env(
    disk: str = "minio",
    ctx: Optional[OperationContext] = None,
    timezone: Optional[str] = None,
) -> S3Disk:
    """Create a disk configured from ``MINIO_*`` environment variables."""
    config = DiskSettings().to_config(disk=disk, timezone=timezone)
    return create_disk(config, ctx)

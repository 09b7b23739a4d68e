"""Directory emulating disk over S3-compatible object storage."""

from .driver import S3Disk
from .factory import create_disk, disk_from_env

__all__ = ["S3Disk", "create_disk", "disk_from_env"]

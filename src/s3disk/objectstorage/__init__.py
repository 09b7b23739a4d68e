"""Object storage operations for S3-compatible services."""

from .clients import S3ClientManager
from .s3_operations import ObjectInfo, ObjectStat, ObjectStore, RemoveError

__all__ = [
    "ObjectInfo",
    "ObjectStat",
    "ObjectStore",
    "RemoveError",
    "S3ClientManager",
]

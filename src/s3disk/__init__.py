"""A filesystem driver for S3-compatible object storage.

This package makes a bucket behave like a nested filesystem: directories are
emulated with zero-byte marker objects, listings work on normalized key
prefixes, and moves are built from server-side copy plus delete. It works
with MinIO, AWS S3 and other S3-compatible services.

Key Features:
    - Files and directories, flat or recursive listing
    - Put, copy, move and delete, including whole directories
    - Uploads with content based extension detection
    - Size, MIME type and timezone aware modification times
    - Public and presigned URLs
    - Cancellation and deadlines through OperationContext
    - CLI interface

Usage:
    >>> from s3disk import DiskConfig, create_disk
    >>> disk = create_disk(DiskConfig(
    ...     key="minioadmin", secret="minioadmin", bucket="goravel",
    ...     url="http://localhost:9000", endpoint="localhost:9000",
    ... ))
    >>> disk.put("avatars/me.txt", "hello")
    >>> disk.all_directories("/")
    ['avatars/']
"""

__version__ = "0.1.0"

from .context import OperationContext
from .core.exceptions import (
    ConfigurationError,
    ConnectionInitError,
    DeadlineExceededError,
    DiskError,
    OperationCancelledError,
    RemoteCallError,
    SourceFileError,
    TimezoneError,
    TraversalError,
    ValidationError,
)
from .disk import S3Disk, create_disk, disk_from_env
from .schemas import DiskConfig, DiskSettings

__all__ = [
    # Disk
    "S3Disk",
    "create_disk",
    "disk_from_env",
    "OperationContext",
    # Configuration
    "DiskConfig",
    "DiskSettings",
    # Errors
    "ConfigurationError",
    "ConnectionInitError",
    "DeadlineExceededError",
    "DiskError",
    "OperationCancelledError",
    "RemoteCallError",
    "SourceFileError",
    "TimezoneError",
    "TraversalError",
    "ValidationError",
]

"""Directory emulating disk driver over an S3-compatible bucket.

The bucket is a flat key space. This driver makes it behave like a
filesystem:

Directories:
    A directory is a zero-byte marker object whose key ends in ``/``.
    Writing a file writes the markers of all of its parent directories
    first, so nested folders are visible to listings without an explicit
    ``make_directory`` call.

Listing:
    Paths are normalized with ``valid_path`` and used as key prefixes.
    ``files``/``directories`` list direct children only, ``all_files``
    lists the whole subtree and ``all_directories`` walks the tree one
    level at a time, parent before descendants.

Mutations:
    ``move`` is ``copy`` followed by ``delete`` and is not atomic. A failed
    copy leaves the source untouched; a failed delete leaves both copies.
"""

import math
import os
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from s3disk.context import OperationContext
from s3disk.core import get_logger
from s3disk.core.exceptions import (
    DiskError,
    RemoteCallError,
    SourceFileError,
    TimezoneError,
    TraversalError,
    ValidationError,
)
from s3disk.objectstorage import ObjectStore
from s3disk.path import (
    detect_mime_type,
    directory_key,
    full_path_of_file,
    is_directory_key,
    parent_directories,
    random_name,
    strip_prefix,
    valid_path,
)
from s3disk.schemas import DiskConfig

logger = get_logger(__name__)

# SigV4 presigned URLs are valid for at most seven days
MAX_PRESIGN_TTL = timedelta(days=7)

SourceFile = Union[str, os.PathLike]


class S3Disk:
    """A filesystem view of one bucket."""

    def __init__(self, config: DiskConfig, store: ObjectStore, ctx: OperationContext):
        self.config = config
        self.store = store
        self.ctx = ctx

    @property
    def disk(self) -> str:
        return self.config.disk

    @property
    def bucket(self) -> str:
        return self.config.bucket

    @property
    def context(self) -> OperationContext:
        return self.ctx

    def with_context(self, ctx: OperationContext) -> Optional["S3Disk"]:
        """A new disk with the same configuration bound to ``ctx``.

        The client is rebuilt so its timeouts follow the new deadline.
        Construction failures are logged and yield None instead of raising.
        """
        from .factory import create_disk

        try:
            return create_disk(self.config, ctx)
        except DiskError as e:
            logger.warning(
                f"init {self.disk} disk fail: {e}", disk=self.disk, error=str(e)
            )
            return None

    # Listing

    def files(self, path: str) -> list[str]:
        """Files directly under ``path``, relative to it."""
        prefix = valid_path(path)
        return [
            strip_prefix(entry.key, prefix)
            for entry in self.store.list_objects(prefix)
            if not is_directory_key(entry.key)
        ]

    def directories(self, path: str) -> list[str]:
        """Immediate subdirectories of ``path``, each ending in ``/``."""
        prefix = valid_path(path)
        directories = []
        for entry in self.store.list_objects(prefix):
            if is_directory_key(entry.key):
                directory = strip_prefix(entry.key, prefix)
                if directory:
                    directories.append(directory)
        return directories

    def all_files(self, path: str) -> list[str]:
        """Every file in the subtree of ``path``, e.g. ``"a/b/c.txt"``."""
        prefix = valid_path(path)
        return [
            strip_prefix(entry.key, prefix)
            for entry in self.store.list_objects(prefix, recursive=True)
            if not is_directory_key(entry.key)
        ]

    def all_directories(self, path: str) -> list[str]:
        """Every directory in the subtree of ``path``.

        Each directory is followed by all of its descendants before its
        next sibling, e.g. ``["3/", "3/4/", "3/5/", "3/5/6/"]``.

        Raises:
            TraversalError: On the first listing failure at any depth
            OperationCancelledError: If the context is cancelled mid-walk
        """
        prefix = valid_path(path)
        try:
            return self._walk_directories(prefix)
        except TraversalError:
            raise
        except RemoteCallError as e:
            error_msg = f"Failed to walk directories under '{prefix}': {e}"
            logger.error(error_msg, bucket=self.bucket, prefix=prefix)
            raise TraversalError(error_msg) from e

    def _walk_directories(self, prefix: str) -> list[str]:
        children = [
            entry.key
            for entry in self.store.list_objects(prefix)
            if is_directory_key(entry.key) and entry.key != prefix
        ]

        directories = []
        for child in children:
            relative = strip_prefix(child, prefix)
            directories.append(relative)
            directories.extend(
                relative + descendant for descendant in self._walk_directories(child)
            )
        return directories

    # Existence & metadata

    def exists(self, file: str) -> bool:
        """Whether ``file`` can be stat'ed.

        Any failure counts as absent, including transient ones.
        """
        try:
            self.store.stat_object(file)
        except DiskError:
            return False
        return True

    def missing(self, file: str) -> bool:
        return not self.exists(file)

    def size(self, file: str) -> int:
        return self.store.stat_object(file).size

    def mime_type(self, file: str) -> str:
        return self.store.stat_object(file).content_type

    def last_modified(self, file: str) -> datetime:
        """Last modification time in the configured timezone."""
        stat = self.store.stat_object(file)
        try:
            zone = ZoneInfo(self.config.timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise TimezoneError(
                f"Unknown timezone '{self.config.timezone}': {e}"
            ) from e

        last_modified = stat.last_modified
        if last_modified.tzinfo is None:
            last_modified = last_modified.replace(tzinfo=timezone.utc)
        return last_modified.astimezone(zone)

    def get(self, file: str) -> str:
        """Content of ``file`` as text; invalid UTF-8 is replaced."""
        return self.get_bytes(file).decode("utf-8", errors="replace")

    def get_bytes(self, file: str) -> bytes:
        return self.store.get_object(file)

    def path(self, file: str) -> str:
        return file

    # Mutations

    def put(self, file: str, content: Union[str, bytes]) -> None:
        """Write ``content`` to ``file``.

        The markers of every parent directory are written first. The
        stored content type is detected from the content itself.
        """
        data = content.encode("utf-8") if isinstance(content, str) else content

        for parent in parent_directories(file):
            self._write(parent, b"")
        self._write(file, data)

        logger.info("File stored", bucket=self.bucket, key=file, size=len(data))

    def _write(self, key: str, data: bytes) -> None:
        self.store.put_object(key, data, detect_mime_type(data))

    def make_directory(self, directory: str) -> None:
        self.put(directory_key(directory), b"")

    def copy(self, origin_file: str, target_file: str) -> None:
        self.store.copy_object(origin_file, target_file)
        logger.info(
            "File copied", bucket=self.bucket, source=origin_file, target=target_file
        )

    def move(self, old_file: str, new_file: str) -> None:
        self.copy(old_file, new_file)
        self.delete(old_file)

    def delete(self, *files: str) -> None:
        """Delete the given keys. Directories are not expanded.

        Raises:
            RemoteCallError: For the first key the store failed to delete
        """
        if not files:
            return

        for error in self.store.remove_objects(files):
            error_msg = f"Failed to delete '{error.key}': {error.code} {error.message}"
            logger.error(error_msg, bucket=self.bucket, key=error.key)
            raise RemoteCallError(error_msg)

        logger.info("Files deleted", bucket=self.bucket, count=len(files))

    def delete_directory(self, directory: str) -> None:
        """Delete a directory and everything under it; absent is fine."""
        prefix = directory_key(directory)
        self.store.remove_object(prefix, force=True)
        logger.info("Directory deleted", bucket=self.bucket, prefix=prefix)

    def put_file(self, file_path: str, source: SourceFile) -> str:
        """Upload ``source`` under a random 40 character name."""
        return self.put_file_as(file_path, source, random_name())

    def put_file_as(self, file_path: str, source: SourceFile, name: str) -> str:
        """Upload ``source`` as ``name`` under ``file_path``.

        When ``name`` has no extension one is detected from the content of
        ``source``.

        Returns:
            The key the file was stored under

        Raises:
            SourceFileError: If ``source`` cannot be read
        """
        full_path = full_path_of_file(file_path, source, name)

        try:
            data = Path(source).read_bytes()
        except OSError as e:
            raise SourceFileError(
                f"Failed to read source file '{os.fspath(source)}': {e}"
            ) from e

        self.put(full_path, data)
        return full_path

    # URLs

    def url(self, file: str) -> str:
        """Public URL of ``file``; no request is made."""
        real_url = self.config.url.rstrip("/")
        if not real_url.endswith(self.bucket):
            real_url += "/" + self.bucket

        return real_url + "/" + file.lstrip("/")

    def temporary_url(self, file: str, expiry: datetime) -> str:
        """Presigned download URL valid until ``expiry``.

        Raises:
            ValidationError: If ``expiry`` is not between now and 7 days ahead
            RemoteCallError: If signing fails
        """
        if expiry.tzinfo is None:
            ttl = expiry - datetime.now()
        else:
            ttl = expiry - datetime.now(timezone.utc)

        if ttl <= timedelta(0) or ttl > MAX_PRESIGN_TTL:
            raise ValidationError(
                f"Temporary URL expiry must be within {MAX_PRESIGN_TTL} from now, "
                f"got {ttl}"
            )

        expires_in = math.ceil(ttl.total_seconds())
        return self.store.presigned_get_object(file.lstrip("/"), expires_in)

"""Object store operations over an S3-compatible bucket.

This module is the only place that talks to boto3. It exposes the small set
of primitives the disk driver is built on (list, stat, get, put, copy,
remove, presign) and turns every botocore failure into a RemoteCallError
that keeps the original exception as its cause.
"""

from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from itertools import islice
from typing import Iterable, Iterator, Optional

from botocore.exceptions import BotoCoreError, ClientError

from s3disk.context import OperationContext
from s3disk.core import get_logger, get_tracer
from s3disk.core.exceptions import RemoteCallError

logger = get_logger(__name__)
tracer = get_tracer(__name__)

DELIMITER = "/"
DELETE_BATCH_SIZE = 1000


@dataclass(frozen=True)
class ObjectInfo:
    """One entry of a prefix listing."""

    key: str
    size: int = 0
    last_modified: Optional[datetime] = None
    is_prefix: bool = False


@dataclass(frozen=True)
class ObjectStat:
    """Metadata of a single object."""

    key: str
    size: int
    content_type: str
    last_modified: datetime
    etag: str


@dataclass(frozen=True)
class RemoveError:
    """A per-key failure reported by a bulk delete."""

    key: str
    code: str
    message: str


def _batched(items: Iterable[str], size: int) -> Iterator[list[str]]:
    iterator = iter(items)
    while True:
        batch = list(islice(iterator, size))
        if not batch:
            return
        yield batch


class ObjectStore:
    """Object store primitives bound to one bucket and one context."""

    def __init__(self, client, bucket: str, ctx: OperationContext):
        self.client = client
        self.bucket = bucket
        self.ctx = ctx

    @contextmanager
    def _remote_call(self, operation: str, key: str) -> Iterator[None]:
        """Check the context, trace the call and translate botocore errors."""
        self.ctx.raise_if_done()

        with tracer.start_as_current_span(f"s3.{operation}") as span:
            span.set_attribute("s3.bucket", self.bucket)
            span.set_attribute("s3.key", key)
            logger.debug("S3 call", operation=operation, bucket=self.bucket, key=key)
            try:
                yield
            except (ClientError, BotoCoreError) as e:
                error_msg = f"S3 {operation} failed for '{key}': {e}"
                logger.error(
                    error_msg, operation=operation, bucket=self.bucket, error=str(e)
                )
                raise RemoteCallError(error_msg) from e

    def list_objects(self, prefix: str, recursive: bool = False) -> Iterator[ObjectInfo]:
        """Stream the objects under a prefix.

        Non-recursive listings group keys on ``/`` and report each common
        prefix as an entry with ``is_prefix=True``, merged in key order with
        the objects of the same page. Pages are fetched lazily.

        Args:
            prefix: Key prefix to list under
            recursive: List the full subtree instead of direct children

        Yields:
            ObjectInfo for every object (and common prefix) found

        Raises:
            RemoteCallError: If fetching any page fails
        """
        params = {"Bucket": self.bucket, "Prefix": prefix}
        if not recursive:
            params["Delimiter"] = DELIMITER

        with self._remote_call("list_objects", prefix):
            pages = iter(self.client.get_paginator("list_objects_v2").paginate(**params))

        while True:
            with self._remote_call("list_objects", prefix):
                page = next(pages, None)
            if page is None:
                return

            entries = [
                ObjectInfo(
                    key=obj["Key"],
                    size=obj.get("Size", 0),
                    last_modified=obj.get("LastModified"),
                )
                for obj in page.get("Contents", [])
            ]
            entries.extend(
                ObjectInfo(key=common["Prefix"], is_prefix=True)
                for common in page.get("CommonPrefixes", [])
            )
            entries.sort(key=lambda entry: entry.key)
            yield from entries

    def stat_object(self, key: str) -> ObjectStat:
        with self._remote_call("stat_object", key):
            response = self.client.head_object(Bucket=self.bucket, Key=key)

        return ObjectStat(
            key=key,
            size=response.get("ContentLength", 0),
            content_type=response.get("ContentType", ""),
            last_modified=response["LastModified"],
            etag=response.get("ETag", "").strip('"'),
        )

    def get_object(self, key: str) -> bytes:
        with self._remote_call("get_object", key):
            response = self.client.get_object(Bucket=self.bucket, Key=key)
            body = response["Body"]
            try:
                return body.read()
            finally:
                body.close()

    def put_object(self, key: str, data: bytes, content_type: str) -> None:
        with self._remote_call("put_object", key):
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentLength=len(data),
                ContentType=content_type,
            )

    def copy_object(self, source_key: str, target_key: str) -> None:
        with self._remote_call("copy_object", source_key):
            self.client.copy_object(
                Bucket=self.bucket,
                Key=target_key,
                CopySource={"Bucket": self.bucket, "Key": source_key},
            )

    def remove_object(self, key: str, force: bool = False) -> None:
        """Remove one object, or with ``force`` everything under the key.

        A forced remove lists the key as a prefix recursively and bulk
        deletes what it finds, so removing an absent prefix is a no-op.

        Raises:
            RemoteCallError: On the first listing or per-key delete failure
        """
        if not force:
            with self._remote_call("remove_object", key):
                self.client.delete_object(Bucket=self.bucket, Key=key)
            return

        keys = [entry.key for entry in self.list_objects(key, recursive=True)]
        for error in self.remove_objects(keys):
            raise RemoteCallError(
                f"S3 remove_object failed for '{error.key}': "
                f"{error.code} {error.message}"
            )

    def remove_objects(self, keys: Iterable[str]) -> Iterator[RemoveError]:
        """Bulk delete keys in batches, yielding per-key errors."""
        for batch in _batched(keys, DELETE_BATCH_SIZE):
            with self._remote_call("remove_objects", batch[0]):
                response = self.client.delete_objects(
                    Bucket=self.bucket,
                    Delete={"Objects": [{"Key": key} for key in batch], "Quiet": True},
                )

            for error in response.get("Errors", []):
                yield RemoveError(
                    key=error.get("Key", ""),
                    code=error.get("Code", ""),
                    message=error.get("Message", ""),
                )

    def presigned_get_object(self, key: str, expires_in: int) -> str:
        with self._remote_call("presigned_get_object", key):
            return self.client.generate_presigned_url(
                "get_object",
                Params={"Bucket": self.bucket, "Key": key},
                ExpiresIn=expires_in,
            )

"""S3 client configuration and management.

This module builds the boto3 client backing a disk. A disk is configured
with an endpoint host (a scheme, if present, is discarded), static
credentials and a TLS flag, which covers MinIO, AWS S3 and other
S3-compatible services.

Connection Details:
    - The endpoint URL is rebuilt as ``https://host`` or ``http://host``
      from the ``ssl`` flag.
    - Path-style addressing and SigV4 are always used so that buckets on
      self-hosted services resolve without DNS wildcards.
    - When the bound context carries a deadline, connect and read timeouts
      are clamped to the time remaining.
"""

from typing import Any, Dict, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError

from s3disk.context import OperationContext
from s3disk.core import get_logger
from s3disk.core.exceptions import ConnectionInitError
from s3disk.schemas import DiskConfig

logger = get_logger(__name__)

DEFAULT_REGION = "us-east-1"
DEFAULT_TIMEOUT = 60


def endpoint_host(endpoint: str) -> str:
    """Strip an ``http://`` or ``https://`` scheme from an endpoint."""
    for scheme in ("http://", "https://"):
        if endpoint.startswith(scheme):
            return endpoint[len(scheme):]
    return endpoint


def endpoint_url(endpoint: str, ssl: bool) -> str:
    """Endpoint URL with the scheme chosen by the TLS flag."""
    scheme = "https" if ssl else "http"
    return f"{scheme}://{endpoint_host(endpoint)}"


class S3ClientManager:
    """Manages the S3 client connection of one disk."""

    def __init__(self, config: DiskConfig, ctx: Optional[OperationContext] = None):
        """Initialize S3 client manager.

        Args:
            config: Disk configuration
            ctx: Context whose deadline bounds client timeouts
        """
        self.config = config
        self.ctx = ctx or OperationContext.background()
        self._client = None
        logger.debug(
            "S3 client manager initialized",
            disk=config.disk,
            region=config.region or DEFAULT_REGION,
        )

    @property
    def client(self):
        """Get or create S3 client instance."""
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def _timeout(self) -> float:
        remaining = self.ctx.remaining()
        if remaining is None:
            return DEFAULT_TIMEOUT
        return max(min(remaining.total_seconds(), DEFAULT_TIMEOUT), 1)

    def _create_client(self):
        """Create boto3 S3 client with the configured settings."""
        timeout = self._timeout()
        kwargs: Dict[str, Any] = {
            "region_name": self.config.region or DEFAULT_REGION,
            "endpoint_url": endpoint_url(self.config.endpoint, self.config.ssl),
            "aws_access_key_id": self.config.key,
            "aws_secret_access_key": self.config.secret,
            "config": Config(
                signature_version="s3v4",
                s3={"addressing_style": "path"},
                connect_timeout=timeout,
                read_timeout=timeout,
            ),
        }

        try:
            client = boto3.client("s3", **kwargs)  # type: ignore
        except (BotoCoreError, ValueError) as e:
            error_msg = f"init {self.config.disk} disk error: {e}"
            logger.error(error_msg, error=str(e))
            raise ConnectionInitError(error_msg) from e

        logger.info(
            "S3 client created",
            disk=self.config.disk,
            endpoint=kwargs["endpoint_url"],
            bucket=self.config.bucket,
        )
        return client

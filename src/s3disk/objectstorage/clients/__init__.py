"""S3 client management and configuration."""

from .s3_client import S3ClientManager, endpoint_host, endpoint_url

__all__ = ["S3ClientManager", "endpoint_host", "endpoint_url"]

"""Shared S3 test helpers."""

import base64

import boto3

from s3disk.schemas import DiskConfig

TEST_KEY = "test_key"
TEST_SECRET = "test_secret"
TEST_BUCKET = "goravel"
TEST_ENDPOINT = "s3.amazonaws.com"
TEST_URL = f"https://{TEST_ENDPOINT}/{TEST_BUCKET}"

# A 1x1 transparent PNG
PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)

DISK_ENV = {
    "MINIO_ACCESS_KEY_ID": TEST_KEY,
    "MINIO_ACCESS_KEY_SECRET": TEST_SECRET,
    "MINIO_BUCKET": TEST_BUCKET,
    "MINIO_REGION": "us-east-1",
    "MINIO_URL": TEST_URL,
    "MINIO_SSL": "true",
    "MINIO_ENDPOINT": TEST_ENDPOINT,
}


def make_config(**overrides) -> DiskConfig:
    """Disk configuration pointing at the mocked AWS endpoint."""
    values = {
        "key": TEST_KEY,
        "secret": TEST_SECRET,
        "region": "us-east-1",
        "bucket": TEST_BUCKET,
        "url": TEST_URL,
        "ssl": True,
        "endpoint": f"https://{TEST_ENDPOINT}",
        "timezone": "UTC",
    }
    values.update(overrides)
    return DiskConfig(**values)


def create_bucket(bucket: str = TEST_BUCKET):
    """Create the test bucket and return a plain boto3 client."""
    client = boto3.client(
        "s3",
        aws_access_key_id=TEST_KEY,
        aws_secret_access_key=TEST_SECRET,
        region_name="us-east-1",
    )
    client.create_bucket(Bucket=bucket)
    return client

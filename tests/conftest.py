"""Test configuration and fixtures for s3disk."""

import pytest
from utils_s3 import PNG_BYTES


@pytest.fixture
def temp_dir(tmp_path):
    """Create a temporary directory for testing."""
    return tmp_path


@pytest.fixture
def text_file(temp_dir):
    """A plain text upload source."""
    source = temp_dir / "test.txt"
    source.write_text("Goravel")
    return source


@pytest.fixture
def image_file(temp_dir):
    """A PNG upload source."""
    source = temp_dir / "logo.png"
    source.write_bytes(PNG_BYTES)
    return source


@pytest.fixture
def untitled_text_file(temp_dir):
    """A plain text upload source without an extension."""
    source = temp_dir / "untitled"
    source.write_text("Goravel")
    return source


@pytest.fixture(autouse=True)
def aws_credentials(monkeypatch):
    """Keep boto3 away from real credentials."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")

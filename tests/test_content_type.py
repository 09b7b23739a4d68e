"""Tests for content based MIME type and extension detection."""

import pytest

from s3disk.core.exceptions import SourceFileError
from s3disk.path.content_type import (
    detect_mime_type,
    extension_for,
    extension_of_file,
)
from utils_s3 import PNG_BYTES


def test_detect_text():
    assert detect_mime_type(b"Goravel") == "text/plain"


def test_detect_empty():
    assert detect_mime_type(b"") == "text/plain"


def test_detect_png():
    assert detect_mime_type(PNG_BYTES) == "image/png"


@pytest.mark.parametrize(
    "mime_type, extension",
    [
        ("text/plain", "txt"),
        ("text/plain; charset=utf-8", "txt"),
        ("image/png", "png"),
        ("image/jpeg", "jpg"),
        ("application/x-definitely-unknown", "bin"),
    ],
)
def test_extension_for(mime_type, extension):
    assert extension_for(mime_type) == extension


def test_extension_of_file(text_file, image_file):
    assert extension_of_file(text_file) == "txt"
    assert extension_of_file(image_file) == "png"


def test_extension_of_missing_file(temp_dir):
    with pytest.raises(SourceFileError, match="Failed to read source file"):
        extension_of_file(temp_dir / "nope.bin")

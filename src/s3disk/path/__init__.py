"""Path normalization and object key derivation."""

from .content_type import detect_mime_type, extension_for, extension_of_file
from .keys import (
    directory_key,
    full_path_of_file,
    is_directory_key,
    parent_directories,
    random_name,
    strip_prefix,
    valid_path,
)

__all__ = [
    "detect_mime_type",
    "directory_key",
    "extension_for",
    "extension_of_file",
    "full_path_of_file",
    "is_directory_key",
    "parent_directories",
    "random_name",
    "strip_prefix",
    "valid_path",
]

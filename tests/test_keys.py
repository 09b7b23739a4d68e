"""Tests for path normalization and key derivation."""

import pytest

from s3disk.core.exceptions import SourceFileError
from s3disk.path.keys import (
    directory_key,
    full_path_of_file,
    is_directory_key,
    parent_directories,
    random_name,
    strip_prefix,
    valid_path,
)


class TestValidPath:
    """Test normalization of logical paths into listing prefixes."""

    @pytest.mark.parametrize(
        "path, expected",
        [
            ("Files", "Files/"),
            ("./Files", "Files/"),
            ("/Files", "Files/"),
            ("./Files/", "Files/"),
            ("Files/", "Files/"),
            ("a/b", "a/b/"),
            ("", ""),
            ("/", ""),
            (".", ""),
            ("./", ""),
        ],
    )
    def test_valid_path(self, path, expected):
        """Test leading markers are stripped and a separator is appended."""
        assert valid_path(path) == expected

    @pytest.mark.parametrize(
        "path", ["x", "./x", "/x", "./x/", "..", "./.", "/./a", ".hidden", ""]
    )
    def test_valid_path_idempotent(self, path):
        """Test normalizing twice changes nothing."""
        assert valid_path(valid_path(path)) == valid_path(path)


class TestKeyHelpers:
    """Test small key helpers."""

    def test_directory_key(self):
        assert directory_key("a") == "a/"
        assert directory_key("a/") == "a/"

    def test_is_directory_key(self):
        assert is_directory_key("a/")
        assert not is_directory_key("a/1.txt")

    def test_strip_prefix(self):
        assert strip_prefix("Files/3/3.txt", "Files/") == "3/3.txt"
        assert strip_prefix("Other/1.txt", "Files/") == "Other/1.txt"
        assert strip_prefix("1.txt", "") == "1.txt"

    def test_parent_directories(self):
        """Test every ancestor is returned, outermost first."""
        assert parent_directories("Put/a/b/1.txt") == ["Put/", "Put/a/", "Put/a/b/"]
        assert parent_directories("a/b/") == ["a/"]
        assert parent_directories("1.txt") == []
        assert parent_directories("a/") == []

    def test_random_name(self):
        name = random_name()
        assert len(name) == 40
        assert name.isalnum()
        assert random_name() != name


class TestFullPathOfFile:
    """Test upload key derivation."""

    def test_name_with_extension_kept(self, text_file):
        assert full_path_of_file("PutFileAs", text_file, "text1.txt") == (
            "PutFileAs/text1.txt"
        )

    def test_extension_inferred_from_content(self, untitled_text_file):
        assert full_path_of_file("PutFileAs", untitled_text_file, "text") == (
            "PutFileAs/text.txt"
        )

    def test_image_extension_inferred(self, image_file):
        assert full_path_of_file("PutFileAs1", image_file, "image") == (
            "PutFileAs1/image.png"
        )

    def test_name_separators_trimmed(self, text_file):
        assert full_path_of_file("dir", text_file, "/nested/name.txt/") == (
            "dir/name.txt"
        )

    def test_dot_prefixed_name_kept(self, text_file):
        assert full_path_of_file("dir", text_file, ".env") == "dir/.env"

    def test_empty_target_dir(self, text_file):
        assert full_path_of_file("", text_file, "a.txt") == "a.txt"

    def test_unreadable_source(self, temp_dir):
        """Test a missing source fails with an OSError-kind error."""
        with pytest.raises(SourceFileError) as exc_info:
            full_path_of_file("dir", temp_dir / "missing", "name")

        assert isinstance(exc_info.value, OSError)

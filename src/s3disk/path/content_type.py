"""Content type and extension detection from file content."""

import mimetypes
import os
from typing import Union

import magic

from s3disk.core import get_logger
from s3disk.core.exceptions import SourceFileError

logger = get_logger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"
EMPTY_MIME_TYPE = "text/plain"

# libmagic needs only the head of a file
SNIFF_BYTES = 8192

# Preferred extensions where mimetypes would pick an unusual one
_EXTENSIONS = {
    "text/plain": "txt",
    "text/html": "html",
    "text/csv": "csv",
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/svg+xml": "svg",
    "application/json": "json",
    "application/pdf": "pdf",
    "application/zip": "zip",
}


def detect_mime_type(data: bytes) -> str:
    """Detect the MIME type of content by its magic bytes.

    Empty content, such as a directory marker, is ``text/plain``.
    """
    if not data:
        return EMPTY_MIME_TYPE

    mime_type = magic.from_buffer(data[:SNIFF_BYTES], mime=True)
    return mime_type or DEFAULT_MIME_TYPE


def extension_for(mime_type: str) -> str:
    """File extension (without dot) for a MIME type."""
    media_type = mime_type.split(";", 1)[0].strip().lower()
    if media_type in _EXTENSIONS:
        return _EXTENSIONS[media_type]

    guessed = mimetypes.guess_extension(media_type)
    if guessed:
        return guessed.lstrip(".")
    return "bin"


def extension_of_file(source: Union[str, os.PathLike]) -> str:
    """Detect a file's extension from its content.

    Raises:
        SourceFileError: If the file cannot be read
    """
    try:
        with open(source, "rb") as f:
            head = f.read(SNIFF_BYTES)
    except OSError as e:
        error_msg = f"Failed to read source file '{os.fspath(source)}': {e}"
        logger.error(error_msg, error=str(e))
        raise SourceFileError(error_msg) from e

    mime_type = detect_mime_type(head)
    logger.debug("Source file content detected", source=str(source), mime=mime_type)
    return extension_for(mime_type)

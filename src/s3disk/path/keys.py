"""Translation between logical paths and object keys.

Object stores have a flat key space; directories exist only as key prefixes
and as zero-byte marker objects whose key ends in ``/``. The helpers here
turn user supplied paths into listing prefixes and derive upload keys.
"""

import os
import posixpath
import secrets
import string
from typing import Union

from .content_type import extension_of_file

SEPARATOR = "/"
RANDOM_NAME_LENGTH = 40

_RANDOM_ALPHABET = string.ascii_letters + string.digits


def valid_path(path: str) -> str:
    """Normalize a logical path into a listing prefix.

    Strips a leading ``./``, then a leading ``/``, then a leading ``.``,
    repeating until none is left, and makes a non-empty result end with
    ``/``. The result is a fixed point: ``valid_path(valid_path(p))``
    equals ``valid_path(p)``.

    >>> valid_path("./photos")
    'photos/'
    >>> valid_path("/")
    ''
    """
    real_path = path
    while True:
        stripped = real_path
        for leading in ("." + SEPARATOR, SEPARATOR, "."):
            if stripped.startswith(leading):
                stripped = stripped[len(leading):]
        if stripped == real_path:
            break
        real_path = stripped

    if real_path and not real_path.endswith(SEPARATOR):
        real_path += SEPARATOR

    return real_path


def is_directory_key(key: str) -> bool:
    return key.endswith(SEPARATOR)


def directory_key(directory: str) -> str:
    """Marker key for a directory."""
    if not directory.endswith(SEPARATOR):
        directory += SEPARATOR
    return directory


def strip_prefix(key: str, prefix: str) -> str:
    if prefix and key.startswith(prefix):
        return key[len(prefix):]
    return key


def parent_directories(key: str) -> list[str]:
    """Marker keys of every ancestor directory of a key, outermost first.

    >>> parent_directories("a/b/c.txt")
    ['a/', 'a/b/']
    >>> parent_directories("a/b/")
    ['a/']
    """
    segments = key.rstrip(SEPARATOR).split(SEPARATOR)[:-1]
    parents = []
    current = ""
    for segment in segments:
        current += segment + SEPARATOR
        if current != SEPARATOR:
            parents.append(current)
    return parents


def random_name(length: int = RANDOM_NAME_LENGTH) -> str:
    return "".join(secrets.choice(_RANDOM_ALPHABET) for _ in range(length))


def full_path_of_file(
    target_dir: str, source: Union[str, os.PathLike], name: str
) -> str:
    """Derive the key an uploaded file is stored under.

    A name that already has an extension is kept as is. Otherwise the
    extension is detected from the source file's content.

    Args:
        target_dir: Directory the file is stored in
        source: Local file being uploaded
        name: Requested file name, with or without extension

    Returns:
        The object key, e.g. ``"avatars/me.png"``

    Raises:
        SourceFileError: If the source must be read and cannot be
    """
    base = posixpath.basename(name.strip(SEPARATOR))
    # a leading dot counts as an extension, so ".env" is kept
    if "." not in base:
        base = f"{base}.{extension_of_file(source)}"

    return posixpath.normpath(posixpath.join(target_dir, base))

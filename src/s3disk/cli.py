"""Command-line interface for s3disk.

This module exposes the disk operations of a bucket configured through
``MINIO_*`` environment variables.

Commands:
    - files / directories: list a path (``--recursive`` for the subtree)
    - get, put-file, mkdir, copy, move, delete, delete-directory
    - exists, stat: inspect a file
    - url, temporary-url: build public or presigned URLs
"""

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Annotated, List, Optional

import typer

from . import __version__
from .disk import S3Disk, disk_from_env

app = typer.Typer(
    name="s3disk",
    help="Filesystem operations on S3-compatible object storage.",
    no_args_is_help=True,
)

DiskOption = Annotated[
    str,
    typer.Option("--disk", "-d", help="Disk name used in messages and errors"),
]


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        typer.echo(f"s3disk {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, help="Show version."),
    ] = None,
) -> None:
    """
    s3disk: a filesystem view of an S3-compatible bucket.

    The bucket is configured with MINIO_ACCESS_KEY_ID, MINIO_ACCESS_KEY_SECRET,
    MINIO_BUCKET, MINIO_URL, MINIO_ENDPOINT, MINIO_REGION and MINIO_SSL.
    """
    pass


def _disk(disk: str) -> S3Disk:
    return disk_from_env(disk=disk)


def _fail(e: Exception) -> None:
    typer.echo(f"Error: {e}", err=True)
    raise typer.Exit(1)


def _echo_items(items: list[str], kind: str) -> None:
    if items:
        typer.echo(f"Found {len(items)} {kind}:")
        for item in items:
            typer.echo(f"  {item}")
    else:
        typer.echo(f"No {kind} found.")


@app.command("files")
def files_cmd(
    path: Annotated[str, typer.Argument(help="Directory to list")] = "",
    recursive: Annotated[
        bool, typer.Option("--recursive", "-r", help="Include nested files")
    ] = False,
    disk: DiskOption = "minio",
) -> None:
    """
    List files under a directory.

    Examples:
        s3disk files photos
        s3disk files photos --recursive
    """
    try:
        driver = _disk(disk)
        items = driver.all_files(path) if recursive else driver.files(path)
        _echo_items(items, "files")
    except Exception as e:
        _fail(e)


@app.command("directories")
def directories_cmd(
    path: Annotated[str, typer.Argument(help="Directory to list")] = "",
    recursive: Annotated[
        bool, typer.Option("--recursive", "-r", help="Include nested directories")
    ] = False,
    disk: DiskOption = "minio",
) -> None:
    """List subdirectories of a directory."""
    try:
        driver = _disk(disk)
        if recursive:
            items = driver.all_directories(path)
        else:
            items = driver.directories(path)
        _echo_items(items, "directories")
    except Exception as e:
        _fail(e)


@app.command("get")
def get_cmd(
    file: Annotated[str, typer.Argument(help="File to print")],
    disk: DiskOption = "minio",
) -> None:
    """Print the content of a file."""
    try:
        typer.echo(_disk(disk).get(file))
    except Exception as e:
        _fail(e)


@app.command("put-file")
def put_file_cmd(
    directory: Annotated[str, typer.Argument(help="Target directory")],
    source: Annotated[Path, typer.Argument(help="Local file to upload")],
    name: Annotated[
        Optional[str],
        typer.Option("--name", help="Stored file name; random if omitted"),
    ] = None,
    disk: DiskOption = "minio",
) -> None:
    """
    Upload a local file into a directory.

    Without an extension in --name, one is detected from the file content.
    """
    try:
        driver = _disk(disk)
        if name:
            key = driver.put_file_as(directory, source, name)
        else:
            key = driver.put_file(directory, source)
        typer.echo(f"Stored: {key}")
    except Exception as e:
        _fail(e)


@app.command("mkdir")
def mkdir_cmd(
    directory: Annotated[str, typer.Argument(help="Directory to create")],
    disk: DiskOption = "minio",
) -> None:
    """Create a directory marker."""
    try:
        _disk(disk).make_directory(directory)
        typer.echo(f"Created: {directory}")
    except Exception as e:
        _fail(e)


@app.command("copy")
def copy_cmd(
    source: Annotated[str, typer.Argument(help="File to copy")],
    target: Annotated[str, typer.Argument(help="Destination file")],
    disk: DiskOption = "minio",
) -> None:
    """Copy a file inside the bucket."""
    try:
        _disk(disk).copy(source, target)
        typer.echo(f"Copied: {source} -> {target}")
    except Exception as e:
        _fail(e)


@app.command("move")
def move_cmd(
    source: Annotated[str, typer.Argument(help="File to move")],
    target: Annotated[str, typer.Argument(help="Destination file")],
    disk: DiskOption = "minio",
) -> None:
    """Move a file inside the bucket (copy, then delete)."""
    try:
        _disk(disk).move(source, target)
        typer.echo(f"Moved: {source} -> {target}")
    except Exception as e:
        _fail(e)


@app.command("delete")
def delete_cmd(
    files: Annotated[List[str], typer.Argument(help="Files to delete")],
    disk: DiskOption = "minio",
) -> None:
    """Delete files. Directories are not expanded."""
    try:
        _disk(disk).delete(*files)
        typer.echo(f"Deleted {len(files)} file(s)")
    except Exception as e:
        _fail(e)


@app.command("delete-directory")
def delete_directory_cmd(
    directory: Annotated[str, typer.Argument(help="Directory to delete")],
    disk: DiskOption = "minio",
) -> None:
    """Delete a directory and everything under it."""
    try:
        _disk(disk).delete_directory(directory)
        typer.echo(f"Deleted directory: {directory}")
    except Exception as e:
        _fail(e)


@app.command("exists")
def exists_cmd(
    file: Annotated[str, typer.Argument(help="File to check")],
    disk: DiskOption = "minio",
) -> None:
    """Check whether a file exists; exits 1 when it does not."""
    try:
        found = _disk(disk).exists(file)
    except Exception as e:
        _fail(e)

    if found:
        typer.echo(f"✓ {file} exists")
    else:
        typer.echo(f"✗ {file} is missing", err=True)
        raise typer.Exit(1)


@app.command("stat")
def stat_cmd(
    file: Annotated[str, typer.Argument(help="File to inspect")],
    disk: DiskOption = "minio",
) -> None:
    """Show size, MIME type and last modification time of a file."""
    try:
        driver = _disk(disk)
        typer.echo(f"File: {file}")
        typer.echo(f"Size: {driver.size(file):,} bytes")
        typer.echo(f"MIME type: {driver.mime_type(file)}")
        typer.echo(f"Last modified: {driver.last_modified(file).isoformat()}")
    except Exception as e:
        _fail(e)


@app.command("url")
def url_cmd(
    file: Annotated[str, typer.Argument(help="File to build the URL for")],
    disk: DiskOption = "minio",
) -> None:
    """Print the public URL of a file."""
    try:
        typer.echo(_disk(disk).url(file))
    except Exception as e:
        _fail(e)


@app.command("temporary-url")
def temporary_url_cmd(
    file: Annotated[str, typer.Argument(help="File to sign a URL for")],
    expires: Annotated[
        int, typer.Option("--expires", help="Validity in seconds")
    ] = 3600,
    disk: DiskOption = "minio",
) -> None:
    """Print a presigned download URL for a file."""
    try:
        expiry = datetime.now(timezone.utc) + timedelta(seconds=expires)
        typer.echo(_disk(disk).temporary_url(file, expiry))
    except Exception as e:
        _fail(e)


if __name__ == "__main__":
    app()

"""Filesystem helpers for markdown-to-html."""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import TextIO

from .constants import DEFAULT_MAX_FILE_SIZE
from .exceptions import FileTooLargeError

logger = logging.getLogger(__name__)

MAX_FILE_SIZE_ENV_VAR = "MARKDOWN_TO_HTML_MAX_FILE_SIZE"


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Resolve the maximum allowed source file size.

    Args:
        default: Fallback value in bytes when the environment variable is unset.

    Returns:
        int: Maximum allowed file size in bytes.

    Raises:
        ValueError: If the environment value is not a positive integer.

    Examples:
        os.environ["MARKDOWN_TO_HTML_MAX_FILE_SIZE"] = "204800"
        limit = get_max_file_size(default=102400)
    """
    env_value = os.environ.get(MAX_FILE_SIZE_ENV_VAR)
    if env_value is None:
        return default

    try:
        max_size = int(env_value)
    except ValueError as error:
        error_message = (
            f"Invalid value for {MAX_FILE_SIZE_ENV_VAR}: {env_value} (expected positive integer)"
        )
        raise ValueError(error_message) from error

    if max_size <= 0:
        error_message = f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {max_size}."
        raise ValueError(error_message)

    return max_size


def collect_file_stat(filepath: Path) -> os.stat_result:
    """Return stat information for a source file.

    Args:
        filepath: Path to the file.

    Returns:
        os.stat_result: File metadata.

    Raises:
        IOError: If the path is inaccessible or not a regular file.

    Examples:
        stat_result = collect_file_stat(Path("README.md"))
    """
    try:
        stat_result = os.stat(filepath)
    except OSError as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise IOError(error_message) from error

    if not stat.S_ISREG(stat_result.st_mode):
        error_message = f"{filepath} is not a regular file."
        raise IOError(error_message)

    return stat_result


def enforce_file_size(stat_result: os.stat_result, max_size: int):
    """Guard against files that exceed the configured maximum size.

    Args:
        stat_result: File stat used to determine size in bytes.
        max_size: Maximum allowed size in bytes.

    Returns:
        None.

    Raises:
        FileTooLargeError: If `stat_result.st_size` exceeds `max_size`.

    Examples:
        enforce_file_size(os.stat("README.md"), 102400)
    """
    if stat_result.st_size > max_size:
        raise FileTooLargeError(stat_result.st_size, max_size)


def safe_read(filepath: Path) -> TextIO:
    """Open a file for reading with consistent error handling.

    Args:
        filepath: Path to the file.

    Returns:
        TextIO: File handle opened for reading in UTF-8.

    Raises:
        IOError: If the path is missing, inaccessible, or not a file.

    Examples:
        with safe_read(Path("README.md")) as handle:
            first_line = handle.readline()
    """
    try:
        return open(filepath, "r", encoding="UTF-8")
    except (
        FileNotFoundError,
        PermissionError,
        IsADirectoryError,
        NotADirectoryError,
    ) as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise IOError(error_message) from error


def split_lines(content: str) -> list[str]:
    """Split text into lines on ``\\n``, ``\\r\\n`` and ``\\r`` only.

    Other characters that `str.splitlines` treats as breaks (form feed,
    vertical tab, U+2028 and friends) stay inside their line. A single
    trailing line ending does not produce an extra empty line.

    Examples:
        split_lines("a\\r\\nb\\x0cc\\n")  # ['a', 'b\\x0cc']
        split_lines("text\\n\\n")  # ['text', '']
    """
    lines = content.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def read_lines(filepath: Path) -> list[str]:
    """Read a UTF-8 file into lines without their terminators.

    ``\\n``, ``\\r\\n`` and ``\\r`` endings are all accepted.

    Raises:
        IOError: If the file cannot be opened.
        UnicodeDecodeError: If the file is not valid UTF-8.
    """
    with safe_read(filepath) as file:
        content = file.read()
    logger.debug("Read %d characters from %s", len(content), filepath)
    return split_lines(content)


def write_html(filepath: Path, html: str):
    """Write an HTML document to `filepath` atomically.

    The document is written to a temporary file in the destination directory,
    synced, and moved over the destination. On failure the destination is left
    untouched and the temporary file is removed.

    Args:
        filepath: Destination path.
        html: Complete HTML document.

    Returns:
        None.

    Raises:
        IOError: If the destination directory is missing or the file cannot be
            written or replaced.

    Examples:
        write_html(Path("out.html"), convert_markdown("# Title"))
    """
    filepath = Path(filepath)
    if filepath.is_dir():
        error_message = f"{filepath} is a directory."
        raise IOError(error_message)

    # Keep the permissions of an existing destination
    try:
        permissions = stat.S_IMODE(os.stat(filepath).st_mode)
    except FileNotFoundError:
        permissions = 0o644
    except OSError as error:
        error_message = f"Error writing {filepath}: {error}"
        raise IOError(error_message) from error

    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w", encoding="UTF-8", delete=False, dir=filepath.parent, suffix=".tmp"
        ) as tmp_file:
            temp_path = Path(tmp_file.name)
            tmp_file.write(html)

            # Ensure the temporary file is flushed and synced before the swap
            tmp_file.flush()
            os.fsync(tmp_file.fileno())

        os.chmod(temp_path, permissions)
        # Replace the destination with the temporary file (atomic operation)
        os.replace(temp_path, filepath)
        temp_path = None
    except OSError as error:
        error_message = f"Error writing {filepath}: {error}"
        raise IOError(error_message) from error
    finally:
        if temp_path is not None:
            try:
                temp_path.unlink(missing_ok=True)
            except OSError:
                pass

    logger.debug("Wrote %d characters to %s", len(html), filepath)

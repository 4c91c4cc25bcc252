"""HTML document assembly for converted Markdown."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from .config import ConfigError, ConverterConfig, validate_config
from .constants import DEFAULT_TITLE, HTML_HEAD_TEMPLATE, HTML_TAIL
from .exceptions import FileTooLargeError
from .filesystem import collect_file_stat, enforce_file_size, read_lines, split_lines
from .parser import convert_lines

logger = logging.getLogger(__name__)


def render_document(fragments: Iterable[str], title: str = DEFAULT_TITLE) -> str:
    """Wrap HTML body lines in the fixed document preamble and suffix.

    Args:
        fragments: Body lines in emission order, without line endings.
        title: Text for the ``<title>`` element, inserted unescaped.

    Returns:
        str: Complete HTML document, one element per line.

    Examples:
        render_document(["<p>hi</p>"])
    """
    body = "".join(f"{fragment}\n" for fragment in fragments)
    return f"{HTML_HEAD_TEMPLATE.format(title=title)}{body}{HTML_TAIL}"


def convert_markdown(content: str, config: ConverterConfig | None = None) -> str:
    """Convert Markdown text into a complete HTML document.

    Args:
        content: Markdown source. Line endings may be ``\\n``, ``\\r\\n`` or ``\\r``.
        config: Configuration supplying the document title. Defaults to a new
            `ConverterConfig` when omitted.

    Returns:
        str: HTML document.

    Raises:
        ConfigError: If the configuration fails validation.

    Examples:
        convert_markdown("# Title\\nplain text\\n* item\\n")
    """
    config = config or ConverterConfig()
    validate_config(config)
    result = convert_lines(split_lines(content))
    return render_document(result.fragments, config.title)


class ConvertFileError(Exception):
    """Raised when converting a Markdown file fails."""


def convert_file(filepath: Path, config: ConverterConfig | None = None) -> str:
    """Read a Markdown file and convert it into an HTML document.

    The whole file is read before conversion starts. Nothing is returned on
    failure.

    Args:
        filepath: Path to the Markdown source, encoded in UTF-8.
        config: Configuration controlling the title and size limit; defaults to
            a new `ConverterConfig` when omitted.

    Returns:
        str: HTML document.

    Raises:
        ConvertFileError: If the configuration is invalid, or the file is
            missing, unreadable, too large, or not valid UTF-8. The original
            exception is chained as the cause.

    Examples:
        html = convert_file(Path("README.md"), ConverterConfig(title="Readme"))
    """
    config = config or ConverterConfig()
    try:
        validate_config(config)
    except ConfigError as error:
        raise ConvertFileError(str(error)) from error

    try:
        enforce_file_size(collect_file_stat(filepath), config.max_file_size)
        lines = read_lines(filepath)
    except FileTooLargeError as error:
        error_message = f"{filepath} exceeds the maximum allowed size of {error.limit} bytes."
        raise ConvertFileError(error_message) from error
    except UnicodeDecodeError as error:
        error_message = f"Invalid UTF-8 sequence in {filepath}: {error}"
        raise ConvertFileError(error_message) from error
    except IOError as error:
        raise ConvertFileError(str(error)) from error

    logger.debug("Converting %d lines from %s", len(lines), filepath)
    result = convert_lines(lines)
    return render_document(result.fragments, config.title)

"""
markdown-to-html: convert Markdown files into standalone HTML documents.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    markdown-to-html --source_file README.md --destination_file README.html

Library Usage:
    from pathlib import Path
    from markdown_to_html import convert_markdown, write_html

    content = Path("README.md").read_text()
    write_html(Path("README.html"), convert_markdown(content))
"""

from .config import ConfigError, ConverterConfig
from .converter import ConvertFileError, convert_file, convert_markdown, render_document
from .exceptions import ConversionError, FileTooLargeError
from .filesystem import write_html
from .inline import rewrite_inline
from .models import BlockState, ClassifiedLine, ConversionResult, LineKind
from .parser import classify, convert_lines

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "classify",
    "rewrite_inline",
    "convert_lines",
    "convert_markdown",
    "convert_file",
    "render_document",
    "write_html",
    # Data models
    "BlockState",
    "ClassifiedLine",
    "ConversionResult",
    "LineKind",
    "ConverterConfig",
    # Exceptions
    "ConfigError",
    "ConversionError",
    "ConvertFileError",
    "FileTooLargeError",
    # Version
    "__version__",
]

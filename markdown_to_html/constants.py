"""Constants used across the markdown-to-html package."""

from __future__ import annotations

import re

from .config import ConverterConfig

DEFAULT_CONFIG = ConverterConfig()

# Block patterns, tried in this order; each must match the whole line.
ORDERED_LIST_PATTERN = re.compile(r"^\d+\.\s+(.*)$")
UNORDERED_LIST_PATTERN = re.compile(r"^\*\s+(.*)$")
BLOCKQUOTE_PATTERN = re.compile(r"^>\s+(.*)$")
HEADING_PATTERN = re.compile(r"^(#{1,6})\s+(.*)$")
CODE_FENCE_PATTERN = re.compile(r"^```(?P<info>.*)$")
CODE_FENCE = "```"

# Inline patterns, applied in this order.
# A `[` right after `!` belongs to an image marker, so links skip it.
LINK_PATTERN = re.compile(r"(?<!!)\[(.*?)\]\((.*?)\)")
IMAGE_PATTERN = re.compile(r"!\[(.*?)\]\((.*?)\)")
BOLD_PATTERN = re.compile(r"\*\*(.*?)\*\*")
ITALIC_PATTERN = re.compile(r"\*(.*?)\*")

# Document shell
DEFAULT_TITLE = DEFAULT_CONFIG.title
DEFAULT_MAX_FILE_SIZE = DEFAULT_CONFIG.max_file_size
HTML_HEAD_TEMPLATE = (
    "<!DOCTYPE html>\n"
    "<html>\n"
    "<head>\n"
    '<meta charset="UTF-8">\n'
    "<title>{title}</title>\n"
    "</head>\n"
    "<body>\n"
)
HTML_TAIL = "</body>\n</html>\n"

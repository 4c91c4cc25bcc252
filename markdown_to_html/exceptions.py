"""Package-specific exception types."""

from __future__ import annotations


class ConversionError(ValueError):
    """Base class for conversion-related errors.

    Malformed Markdown never raises; these errors describe inputs the
    converter refuses to process at all.
    """


class FileTooLargeError(ConversionError):
    """Raised when a source file exceeds the configured maximum size.

    Args:
        size: Size of the offending file in bytes.
        limit: Maximum allowed size in bytes.
    """

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return (
            f"File size of {self.size} bytes exceeds the maximum allowed size "
            f"of {self.limit} bytes"
        )

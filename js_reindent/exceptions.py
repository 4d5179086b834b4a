"""Package-specific exception types."""

from __future__ import annotations


class FormatterError(ValueError):
    """Base class for formatting-related errors.

    Represents errors encountered while preparing or reformatting source text.
    """


class InputTooLargeError(FormatterError):
    """Raised when an input exceeds the configured maximum size.

    Args:
        size: Size of the rejected input in bytes.
        limit: Maximum allowed size in bytes.
    """

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return f"Input of {self.size} bytes exceeds the maximum allowed size of {self.limit} bytes"

"""Exceptions raised while preparing or rendering a full-height PDF."""

from pathlib import Path
from typing import Optional


class FullHeightPDFError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationInvalidError(FullHeightPDFError):
    """
    Exception raised when a configured value cannot be used.

    Attributes:
        message: Error description
        key: Configuration key holding the bad value
        value: The offending value
    """

    def __init__(self, message: str, key: Optional[str] = None, value: Optional[str] = None):
        self.message = message
        self.key = key
        self.value = value

        parts = [message]
        if key:
            parts.append(f"Setting: {key}")
        if value:
            parts.append(f"Value: {value}")

        super().__init__("\n".join(parts))


class ContentReadError(FullHeightPDFError):
    """
    Exception raised when the Markdown source cannot be read.

    Attributes:
        message: Error description
        path: File that failed to read
        original_error: The underlying OSError or LookupError
    """

    def __init__(
        self,
        message: str,
        path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.path = path
        self.original_error = original_error

        parts = [message]
        if path:
            parts.append(f"File: {path}")
        if original_error:
            parts.append(f"Cause: {original_error}")

        super().__init__("\n".join(parts))


class RenderFailureError(FullHeightPDFError):
    """Exception raised when loading, measuring or printing in the browser fails."""

    def __init__(self, message: str, stage: Optional[str] = None, original_error: Optional[Exception] = None):
        self.message = message
        self.stage = stage
        self.original_error = original_error
        super().__init__(message)

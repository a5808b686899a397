"""
Custom exception classes for the file storage service.
Provides specific error types for different failure scenarios.
"""

import io
from typing import Optional, Dict, Any


class FileStorageError(Exception):
    """Base exception for all file storage errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(FileStorageError):
    """Raised when there's a configuration error."""
    pass


class StorageError(FileStorageError):
    """Raised when file storage operations fail."""
    pass


class FileNotFoundInStorageError(StorageError):
    """Raised when a stored file or blob does not exist."""
    pass


class SubstreamError(FileStorageError):
    """Base exception for bounded window stream errors."""
    pass


class InvalidStreamArgumentError(SubstreamError, ValueError):
    """Raised when a window is built or sought with invalid arguments."""
    pass


class StreamDisposedError(SubstreamError, ValueError):
    """Raised when a window is used after it has been closed."""
    pass


class StreamOutOfRangeError(SubstreamError, ValueError):
    """Raised when a position outside the window is requested."""
    pass


class StreamNotSupportedError(SubstreamError, io.UnsupportedOperation):
    """Raised when the parent stream lacks a required capability."""
    pass


class StreamOverflowError(SubstreamError):
    """Raised when a write would cross the end of the window."""
    pass

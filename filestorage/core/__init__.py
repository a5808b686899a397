"""
Core configuration and utilities.

This package contains the fundamental components of the service:
- Configuration management (settings, environment variables)
- Exceptions and error handling
- Logging configuration
"""

from .config import (
    Settings,
    AzureBlobSettings,
    LocalStorageSettings,
    LoggingSettings,
    get_settings,
    reload_settings,
)

from .exceptions import (
    FileStorageError,
    ConfigurationError,
    StorageError,
    FileNotFoundInStorageError,
    SubstreamError,
    InvalidStreamArgumentError,
    StreamDisposedError,
    StreamOutOfRangeError,
    StreamNotSupportedError,
    StreamOverflowError,
)

from .logging import setup_logging, get_logger

__all__ = [
    # Configuration
    "Settings",
    "AzureBlobSettings",
    "LocalStorageSettings",
    "LoggingSettings",
    "get_settings",
    "reload_settings",

    # Logging
    "setup_logging",
    "get_logger",

    # Exceptions
    "FileStorageError",
    "ConfigurationError",
    "StorageError",
    "FileNotFoundInStorageError",
    "SubstreamError",
    "InvalidStreamArgumentError",
    "StreamDisposedError",
    "StreamOutOfRangeError",
    "StreamNotSupportedError",
    "StreamOverflowError",
]

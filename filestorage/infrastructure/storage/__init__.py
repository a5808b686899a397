"""
File storage backends.

This package provides the file storage interface and its implementations:
- Abstract FileStorage interface and FileDescription
- Azure Blob Storage implementation
- Local filesystem implementation for development and tests
"""

from .base import FileDescription, FileStorage, open_upload_source
from .azure_blob import AzureBlobFileStorage
from .file_storage import LocalFileStorage
from .dependencies import get_file_storage

__all__ = [
    "FileDescription",
    "FileStorage",
    "open_upload_source",
    "AzureBlobFileStorage",
    "LocalFileStorage",
    "get_file_storage",
]

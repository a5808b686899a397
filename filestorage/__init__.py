"""
File Storage

Pluggable file storage for game servers, backed by Azure Blob Storage,
with bounded window streams for working on slices of a shared stream.
"""

__version__ = "1.0.0"

__title__ = "filestorage"
__description__ = "Pluggable file storage with an Azure Blob Storage backend"
__license__ = "MIT"

from .core.config import get_settings
from .core.exceptions import FileStorageError, StorageError, SubstreamError
from .infrastructure.io import BoundedWindowStream, ByteStream
from .infrastructure.storage import (
    AzureBlobFileStorage,
    FileDescription,
    FileStorage,
    LocalFileStorage,
    get_file_storage,
)

__all__ = [
    # Metadata
    "__version__",
    "__title__",
    "__description__",
    "__license__",

    # Core components
    "get_settings",

    # Exceptions
    "FileStorageError",
    "StorageError",
    "SubstreamError",

    # Streams
    "BoundedWindowStream",
    "ByteStream",

    # Storage
    "FileStorage",
    "FileDescription",
    "AzureBlobFileStorage",
    "LocalFileStorage",
    "get_file_storage",
]

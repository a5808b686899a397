"""
Storage backend selection.
"""

from typing import Optional

from .azure_blob import AzureBlobFileStorage
from .base import FileStorage
from .file_storage import LocalFileStorage
from ...core.config import Settings, get_settings
from ...core.exceptions import ConfigurationError
from ...core.logging import get_logger

logger = get_logger(__name__)


def get_file_storage(settings: Optional[Settings] = None) -> FileStorage:
    """
    Build the file storage backend named by the settings.

    Args:
        settings: Application settings; the cached settings when omitted

    Returns:
        Configured storage backend
    """
    settings = settings or get_settings()

    if settings.storage_backend == "azure_blob":
        storage: FileStorage = AzureBlobFileStorage(settings.azure_blob)
    elif settings.storage_backend == "local":
        storage = LocalFileStorage(settings.local_storage.base_path)
    else:
        raise ConfigurationError(f"Unknown storage backend: {settings.storage_backend}")

    logger.info(f"Using {settings.storage_backend} file storage")
    return storage

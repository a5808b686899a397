"""
Local filesystem storage implementation.
"""

import json
from pathlib import Path
from typing import BinaryIO, Optional

import aiofiles
import aiofiles.os

from .base import FileDescription, FileStorage, open_upload_source
from ...core.exceptions import FileNotFoundInStorageError, StorageError, SubstreamError
from ...core.logging import get_logger

logger = get_logger(__name__)

METADATA_SUFFIX = ".meta.json"
UPLOAD_CHUNK_SIZE = 64 * 1024


class LocalFileStorage(FileStorage):
    """Local filesystem storage backend."""

    def __init__(self, base_path: str):
        self.base_path = Path(base_path).resolve()
        self.base_path.mkdir(parents=True, exist_ok=True)
        logger.info(f"Initialized local storage at: {self.base_path}")

    def _get_full_path(self, path: str) -> Path:
        """Get full filesystem path from storage path."""
        if path is None:
            raise ValueError("path is required")

        full_path = (self.base_path / path).resolve()
        if self.base_path not in full_path.parents:
            raise StorageError(f"Path escapes the storage root: {path}")
        return full_path

    @staticmethod
    def _get_metadata_path(full_path: Path) -> Path:
        return full_path.with_name(full_path.name + METADATA_SUFFIX)

    async def upload_file(
        self,
        path: str,
        content: BinaryIO,
        mime_type: str,
        length: Optional[int] = None,
    ) -> None:
        """Save content to the local filesystem."""
        full_path = self._get_full_path(path)
        full_path.parent.mkdir(parents=True, exist_ok=True)

        size = 0
        try:
            with open_upload_source(content, length) as source:
                async with aiofiles.open(full_path, "wb") as f:
                    while True:
                        chunk = source.read(UPLOAD_CHUNK_SIZE)
                        if not chunk:
                            break
                        await f.write(chunk)
                        size += len(chunk)

            async with aiofiles.open(self._get_metadata_path(full_path), "w") as f:
                await f.write(json.dumps({"content_type": mime_type}))

        except SubstreamError:
            raise
        except OSError as e:
            logger.error(f"Failed to save file {path}: {e}")
            raise StorageError(f"Failed to save file: {e}") from e

        logger.debug(f"Saved file to: {full_path} ({size} bytes)")

    async def download_file(self, path: str) -> FileDescription:
        """Open a stored file for reading."""
        full_path = self._get_full_path(path)
        if not full_path.is_file():
            raise FileNotFoundInStorageError(f"File not found: {path}")

        content_type = None
        metadata_path = self._get_metadata_path(full_path)
        try:
            if metadata_path.exists():
                async with aiofiles.open(metadata_path, "r") as f:
                    content_type = json.loads(await f.read()).get("content_type")

            return FileDescription(path=path, content_type=content_type, content=open(full_path, "rb"))

        except (OSError, ValueError) as e:
            logger.error(f"Failed to get file {path}: {e}")
            raise StorageError(f"Failed to retrieve file: {e}") from e

    async def get_download_url(self, path: str) -> str:
        """``file://`` URI of the stored file; it does not expire."""
        full_path = self._get_full_path(path)
        if not full_path.is_file():
            raise FileNotFoundInStorageError(f"File not found: {path}")
        return full_path.as_uri()

    async def delete_file(self, path: str) -> None:
        """Delete a file and its metadata from the local filesystem."""
        full_path = self._get_full_path(path)
        if not full_path.is_file():
            raise FileNotFoundInStorageError(f"File not found: {path}")

        try:
            await aiofiles.os.remove(full_path)
            metadata_path = self._get_metadata_path(full_path)
            if metadata_path.exists():
                await aiofiles.os.remove(metadata_path)
        except OSError as e:
            logger.error(f"Failed to delete file {path}: {e}")
            raise StorageError(f"Failed to delete file: {e}") from e

        logger.debug(f"Deleted file: {full_path}")

        # Clean up empty directories
        parent = full_path.parent
        if parent != self.base_path:
            try:
                parent.rmdir()
            except OSError:
                # Directory not empty, which is fine
                pass

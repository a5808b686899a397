"""
Abstract file storage interface.
"""

from abc import ABC, abstractmethod
from contextlib import nullcontext
from dataclasses import dataclass
from typing import BinaryIO, ContextManager, Optional

from ..io.substream import BoundedWindowStream


@dataclass
class FileDescription:
    """A downloaded file."""

    path: str
    content_type: Optional[str]
    content: BinaryIO


def open_upload_source(content: BinaryIO, length: Optional[int] = None) -> ContextManager:
    """
    Stream to read an upload from.

    Without ``length`` the whole of ``content`` is used. With it, only the next
    ``length`` bytes are exposed, and ``content`` is left just past them on exit
    even if fewer were read.
    """
    if length is None:
        return nullcontext(content)
    return BoundedWindowStream(content, length, closes_parent=False)


class FileStorage(ABC):
    """Abstract file storage interface."""

    @abstractmethod
    async def upload_file(
        self,
        path: str,
        content: BinaryIO,
        mime_type: str,
        length: Optional[int] = None,
    ) -> None:
        """
        Store content under ``path``, replacing any existing file.

        Args:
            path: Storage path/key
            content: Binary stream to upload, read from its current position
            mime_type: Content type recorded with the file
            length: Optional number of bytes to take from ``content``
        """
        pass

    @abstractmethod
    async def download_file(self, path: str) -> FileDescription:
        """
        Retrieve a stored file.

        Args:
            path: Storage path/key

        Returns:
            File description with an open content stream
        """
        pass

    @abstractmethod
    async def get_download_url(self, path: str) -> str:
        """
        Get a URL the file can be fetched from without further credentials.

        Args:
            path: Storage path/key

        Returns:
            Download URL, time-limited where the backend supports it
        """
        pass

    @abstractmethod
    async def delete_file(self, path: str) -> None:
        """
        Delete a stored file.

        Args:
            path: Storage path/key
        """
        pass

"""
Pytest configuration and shared fixtures.
"""

import io
import tempfile
from pathlib import Path

import pytest

from filestorage.core.config import AzureBlobSettings
from filestorage.infrastructure.storage.file_storage import LocalFileStorage


class ForwardOnlyStream(io.RawIOBase):
    """
    Non-seekable stream over an in-memory buffer.

    Stands in for sockets and pipes: it can be read or written front to back
    but reports itself as not seekable.
    """

    def __init__(self, data: bytes = b"", readable: bool = True, writable: bool = False):
        self._buffer = io.BytesIO(data)
        self._readable = readable
        self._writable = writable
        self.read_calls = 0

    def readable(self) -> bool:
        return self._readable

    def writable(self) -> bool:
        return self._writable

    def seekable(self) -> bool:
        return False

    def readinto(self, buffer) -> int:
        if not self._readable:
            raise io.UnsupportedOperation("read")
        self.read_calls += 1
        data = self._buffer.read(len(buffer))
        buffer[:len(data)] = data
        return len(data)

    def write(self, data) -> int:
        if not self._writable:
            raise io.UnsupportedOperation("write")
        return self._buffer.write(data)

    def tell(self) -> int:
        return self._buffer.tell()

    def getvalue(self) -> bytes:
        return self._buffer.getvalue()


@pytest.fixture
def forward_only_stream():
    """Factory for non-seekable streams."""
    return ForwardOnlyStream


@pytest.fixture
def sample_bytes() -> bytes:
    """Recognisable payload: 0..255 repeated."""
    return bytes(range(256)) * 40


@pytest.fixture(scope="function")
def temp_storage_dir():
    """Create a temporary directory for storage tests."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture(scope="function")
def local_storage(temp_storage_dir):
    """Local storage rooted in a temporary directory."""
    return LocalFileStorage(str(temp_storage_dir))


@pytest.fixture
def azure_settings() -> AzureBlobSettings:
    """Azure settings with a development-style connection string."""
    return AzureBlobSettings(
        connection_string=(
            "DefaultEndpointsProtocol=https;AccountName=devaccount;"
            "AccountKey=ZGV2a2V5;EndpointSuffix=core.windows.net"
        ),
        container="game-files",
    )

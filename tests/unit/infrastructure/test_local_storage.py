"""
Unit tests for the local filesystem storage backend.
"""

import io

import pytest

from filestorage.core.exceptions import FileNotFoundInStorageError, StorageError
from filestorage.infrastructure.storage.base import FileDescription


class TestLocalFileStorage:
    """Test cases for LocalFileStorage."""

    async def test_upload_and_download(self, local_storage):
        """Test uploaded content and content type come back on download."""
        await local_storage.upload_file("maps/arena.bin", io.BytesIO(b"map data"), "application/octet-stream")

        description = await local_storage.download_file("maps/arena.bin")
        try:
            assert isinstance(description, FileDescription)
            assert description.path == "maps/arena.bin"
            assert description.content_type == "application/octet-stream"
            assert description.content.read() == b"map data"
        finally:
            description.content.close()

    async def test_upload_with_length_takes_slice(self, local_storage, sample_bytes):
        """Test a length limits the upload and leaves the source after the slice."""
        source = io.BytesIO(sample_bytes)
        source.seek(16)

        await local_storage.upload_file("slice.bin", source, "application/octet-stream", length=100)

        assert source.tell() == 116
        description = await local_storage.download_file("slice.bin")
        with description.content:
            assert description.content.read() == sample_bytes[16:116]

    async def test_consecutive_slices_from_one_stream(self, local_storage):
        """Test several files can be cut back to back from one stream."""
        source = io.BytesIO(b"AAAABBBBBBCC")

        await local_storage.upload_file("a.txt", source, "text/plain", length=4)
        await local_storage.upload_file("b.txt", source, "text/plain", length=6)
        await local_storage.upload_file("c.txt", source, "text/plain")

        for path, expected in (("a.txt", b"AAAA"), ("b.txt", b"BBBBBB"), ("c.txt", b"CC")):
            description = await local_storage.download_file(path)
            with description.content:
                assert description.content.read() == expected

    async def test_upload_replaces_existing(self, local_storage):
        """Test uploading to an existing path overwrites it."""
        await local_storage.upload_file("save.json", io.BytesIO(b"{}"), "application/json")
        await local_storage.upload_file("save.json", io.BytesIO(b"[1]"), "text/plain")

        description = await local_storage.download_file("save.json")
        with description.content:
            assert description.content.read() == b"[1]"
        assert description.content_type == "text/plain"

    async def test_download_missing_file(self, local_storage):
        """Test downloading an unknown path raises not found."""
        with pytest.raises(FileNotFoundInStorageError, match="File not found"):
            await local_storage.download_file("missing.bin")

    async def test_get_download_url(self, local_storage, temp_storage_dir):
        """Test the download URL is the file URI."""
        await local_storage.upload_file("replay.dat", io.BytesIO(b"r"), "application/octet-stream")

        url = await local_storage.get_download_url("replay.dat")

        assert url == (temp_storage_dir.resolve() / "replay.dat").as_uri()

    async def test_get_download_url_requires_path(self, local_storage):
        """Test a missing path is rejected."""
        with pytest.raises(ValueError, match="path is required"):
            await local_storage.get_download_url(None)

    async def test_delete_file(self, local_storage, temp_storage_dir):
        """Test deleting removes the file, its metadata and empty folders."""
        await local_storage.upload_file("logs/match.log", io.BytesIO(b"log"), "text/plain")

        await local_storage.delete_file("logs/match.log")

        assert not (temp_storage_dir / "logs").exists()
        with pytest.raises(FileNotFoundInStorageError):
            await local_storage.download_file("logs/match.log")

    async def test_delete_missing_file(self, local_storage):
        """Test deleting an unknown path raises not found."""
        with pytest.raises(FileNotFoundInStorageError):
            await local_storage.delete_file("nothing.bin")

    async def test_path_outside_root_rejected(self, local_storage):
        """Test paths cannot escape the storage root."""
        with pytest.raises(StorageError, match="escapes the storage root"):
            await local_storage.upload_file("../outside.bin", io.BytesIO(b"x"), "text/plain")

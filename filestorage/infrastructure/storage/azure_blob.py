"""
Azure Blob Storage implementation.
"""

import io
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone
from typing import AsyncIterator, BinaryIO, Optional, Set

from azure.core.exceptions import AzureError, ResourceExistsError, ResourceNotFoundError
from azure.storage.blob import BlobSasPermissions, ContentSettings, generate_blob_sas
from azure.storage.blob.aio import BlobServiceClient, ContainerClient

from .base import FileDescription, FileStorage, open_upload_source
from ...core.config import AzureBlobSettings, get_settings
from ...core.exceptions import ConfigurationError, FileNotFoundInStorageError, StorageError
from ...core.logging import get_logger

logger = get_logger(__name__)

CONNECTION_STRING_SETTING = "fileStorage.azureBlob.connectionString"


class AzureBlobFileStorage(FileStorage):
    """Azure Blob Storage backend."""

    # Containers already created by this process.
    _created_containers: Set[str] = set()

    def __init__(self, settings: Optional[AzureBlobSettings] = None):
        self.connection_string: Optional[str] = None
        self.container: Optional[str] = None
        self.sas_expiry = timedelta(hours=1)
        self.apply_config(settings or get_settings().azure_blob)

    def apply_config(self, settings: AzureBlobSettings) -> None:
        """Pick up new connection settings; later operations use them."""
        self.connection_string = settings.connection_string
        self.container = settings.container
        self.sas_expiry = timedelta(hours=settings.sas_expiry_hours)
        logger.debug(f"Azure blob storage configured for container: {self.container}")

    def _create_service_client(self) -> BlobServiceClient:
        if not self.connection_string:
            logger.error(
                f"Azure blob storage connection string is missing. "
                f"Check the configuration '{CONNECTION_STRING_SETTING}'"
            )
            raise ConfigurationError(
                f"Azure blob storage connection string is not set ('{CONNECTION_STRING_SETTING}')"
            )

        try:
            return BlobServiceClient.from_connection_string(self.connection_string)
        except ValueError as e:
            logger.error(
                f"Failed to create Azure blob storage client. "
                f"Check the configuration '{CONNECTION_STRING_SETTING}': {e}"
            )
            raise ConfigurationError(f"Invalid Azure blob storage connection string: {e}") from e

    @asynccontextmanager
    async def _container_client(self) -> AsyncIterator[ContainerClient]:
        """Open a container client, creating the container on first use."""
        service = self._create_service_client()
        async with service:
            container = service.get_container_client(self.container)

            if self.container not in self._created_containers:
                try:
                    await container.create_container()
                    logger.info(f"Created blob container: {self.container}")
                except ResourceExistsError:
                    logger.debug(f"Blob container already exists: {self.container}")
                except AzureError as e:
                    logger.error(f"Failed to create blob container {self.container}: {e}")
                    raise StorageError(f"Failed to create blob container: {e}") from e
                self._created_containers.add(self.container)

            yield container

    async def upload_file(
        self,
        path: str,
        content: BinaryIO,
        mime_type: str,
        length: Optional[int] = None,
    ) -> None:
        """Upload content to a block blob and set its content type."""
        async with self._container_client() as container:
            blob = container.get_blob_client(path)

            with open_upload_source(content, length) as source:
                data = source.read()

            try:
                await blob.upload_blob(
                    data,
                    overwrite=True,
                    content_settings=ContentSettings(content_type=mime_type),
                )
            except AzureError as e:
                logger.error(f"Failed to upload blob {path}: {e}")
                raise StorageError(f"Failed to upload file: {e}") from e

        logger.info(f"Uploaded blob {path} ({len(data)} bytes, {mime_type})")

    async def download_file(self, path: str) -> FileDescription:
        """Download a blob into memory."""
        async with self._container_client() as container:
            blob = container.get_blob_client(path)

            try:
                downloader = await blob.download_blob()
                data = await downloader.readall()
            except ResourceNotFoundError as e:
                raise FileNotFoundInStorageError(f"File not found: {path}") from e
            except AzureError as e:
                logger.error(f"Failed to download blob {path}: {e}")
                raise StorageError(f"Failed to retrieve file: {e}") from e

        content_type = downloader.properties.content_settings.content_type
        logger.debug(f"Downloaded blob {path} ({len(data)} bytes)")
        return FileDescription(path=path, content_type=content_type, content=io.BytesIO(data))

    async def get_download_url(self, path: str) -> str:
        """Blob URL carrying a read-only SAS token."""
        if path is None:
            raise ValueError("path is required")

        async with self._container_client() as container:
            blob = container.get_blob_client(path)

            # Blob is private, sign a link
            account_key = getattr(container.credential, "account_key", None)
            if not account_key:
                raise ConfigurationError(
                    f"An account key is required to sign download URLs ('{CONNECTION_STRING_SETTING}')"
                )

            sas_token = generate_blob_sas(
                account_name=blob.account_name,
                container_name=blob.container_name,
                blob_name=blob.blob_name,
                account_key=account_key,
                permission=BlobSasPermissions(read=True),
                expiry=datetime.now(timezone.utc) + self.sas_expiry,
            )

        return f"{blob.url}?{sas_token}"

    async def delete_file(self, path: str) -> None:
        """Delete a blob."""
        async with self._container_client() as container:
            blob = container.get_blob_client(path)

            try:
                await blob.delete_blob()
            except ResourceNotFoundError as e:
                raise FileNotFoundInStorageError(f"File not found: {path}") from e
            except AzureError as e:
                logger.error(f"Failed to delete blob {path}: {e}")
                raise StorageError(f"Failed to delete file: {e}") from e

        logger.debug(f"Deleted blob: {path}")

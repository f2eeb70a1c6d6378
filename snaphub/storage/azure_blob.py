import logging

from azure.core.exceptions import AzureError, ResourceExistsError
from azure.storage.blob import ContentSettings
from azure.storage.blob.aio import BlobServiceClient

from snaphub.utils.exceptions import StorageError

logger = logging.getLogger(__name__)


class AzureBlobStore:
    def __init__(self, connection_string: str, container: str):
        self.service = BlobServiceClient.from_connection_string(connection_string)
        self.container = self.service.get_container_client(container)

    async def ensure_ready(self) -> None:
        try:
            await self.container.create_container()
            logger.info("Created blob container %s", self.container.container_name)
        except ResourceExistsError:
            pass
        except AzureError as e:
            raise StorageError("Blob container unavailable", details=str(e)) from e

    async def upload(self, name: str, data: bytes, content_type: str) -> str:
        blob = self.container.get_blob_client(name)
        try:
            await blob.upload_blob(
                data,
                overwrite=True,
                content_settings=ContentSettings(content_type=content_type),
            )
        except AzureError as e:
            raise StorageError("Blob upload failed", details=str(e)) from e
        return blob.url

    async def close(self) -> None:
        await self.service.close()

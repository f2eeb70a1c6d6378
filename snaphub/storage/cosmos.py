import logging

from azure.core import MatchConditions
from azure.core.exceptions import AzureError
from azure.cosmos import PartitionKey
from azure.cosmos.aio import CosmosClient
from azure.cosmos.exceptions import CosmosAccessConditionFailedError, CosmosResourceNotFoundError

from snaphub.storage.base import VersionedDocument
from snaphub.utils.exceptions import ConflictError, StorageError

logger = logging.getLogger(__name__)

LIST_QUERY = "SELECT * FROM c ORDER BY c.createdAt DESC"


class CosmosDocumentStore:
    """Photo documents in a Cosmos DB container partitioned on ``/id``."""

    def __init__(self, endpoint: str, key: str, database: str, container: str):
        self.client = CosmosClient(endpoint, credential=key)
        self.database_name = database
        self.container_name = container
        self.container = None

    async def ensure_ready(self) -> None:
        try:
            database = await self.client.create_database_if_not_exists(id=self.database_name)
            self.container = await database.create_container_if_not_exists(
                id=self.container_name,
                partition_key=PartitionKey(path="/id"),
            )
        except AzureError as e:
            raise StorageError("Document container unavailable", details=e.message) from e
        logger.info("Cosmos container %s/%s ready", self.database_name, self.container_name)

    async def create(self, doc: dict) -> dict:
        try:
            return await self.container.create_item(body=doc)
        except AzureError as e:
            raise StorageError("Document create failed", details=e.message) from e

    async def read(self, doc_id: str) -> VersionedDocument | None:
        try:
            item = await self.container.read_item(item=doc_id, partition_key=doc_id)
        except CosmosResourceNotFoundError:
            return None
        except AzureError as e:
            raise StorageError("Document read failed", details=e.message) from e
        return VersionedDocument(body=item, etag=item.get("_etag", ""))

    async def replace(self, doc_id: str, doc: dict, etag: str) -> dict:
        try:
            return await self.container.replace_item(
                item=doc_id,
                body=doc,
                etag=etag,
                match_condition=MatchConditions.IfNotModified,
            )
        except CosmosAccessConditionFailedError as e:
            raise ConflictError(doc_id) from e
        except AzureError as e:
            raise StorageError("Document replace failed", details=e.message) from e

    async def query_all(self) -> list[dict]:
        try:
            return [item async for item in self.container.query_items(query=LIST_QUERY)]
        except AzureError as e:
            raise StorageError("Document query failed", details=e.message) from e

    async def close(self) -> None:
        await self.client.close()

from snaphub.config import Settings
from snaphub.storage.base import BlobStore, DocumentStore, VersionedDocument


def build_blob_store(settings: Settings) -> BlobStore:
    if settings.blob_backend == "local":
        from snaphub.storage.local_blob import LocalBlobStore
        return LocalBlobStore(settings.data_dir, settings.blob_container, settings.media_url)

    from snaphub.storage.azure_blob import AzureBlobStore
    return AzureBlobStore(settings.azure_storage_connection_string, settings.blob_container)


def build_document_store(settings: Settings) -> DocumentStore:
    if settings.document_backend == "sql":
        from snaphub.storage.sql import SqlDocumentStore
        return SqlDocumentStore(settings.database_url)

    from snaphub.storage.cosmos import CosmosDocumentStore
    return CosmosDocumentStore(
        settings.cosmos_endpoint,
        settings.cosmos_key,
        settings.cosmos_db,
        settings.cosmos_container,
    )


__all__ = [
    "BlobStore",
    "DocumentStore",
    "VersionedDocument",
    "build_blob_store",
    "build_document_store",
]

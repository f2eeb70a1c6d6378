from dataclasses import dataclass
from typing import Protocol


@dataclass
class VersionedDocument:
    body: dict
    etag: str


class BlobStore(Protocol):
    async def ensure_ready(self) -> None: ...

    async def upload(self, name: str, data: bytes, content_type: str) -> str:
        """Store `data` under `name` and return its retrieval URL."""
        ...

    async def close(self) -> None: ...


class DocumentStore(Protocol):
    async def ensure_ready(self) -> None: ...

    async def create(self, doc: dict) -> dict: ...

    async def read(self, doc_id: str) -> VersionedDocument | None: ...

    async def replace(self, doc_id: str, doc: dict, etag: str) -> dict:
        """Overwrite the whole document; raise ConflictError when `etag` is stale."""
        ...

    async def query_all(self) -> list[dict]:
        """All documents, newest `createdAt` first."""
        ...

    async def close(self) -> None: ...

import logging

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError

from snaphub.database import create_engine, create_sessionmaker, create_tables
from snaphub.models.photo_document import PhotoDocument
from snaphub.storage.base import VersionedDocument
from snaphub.utils.exceptions import ConflictError, StorageError

logger = logging.getLogger(__name__)


class SqlDocumentStore:
    """Document store on a single SQL table, one JSON body per photo.

    The etag handed out by ``read`` is the row's integer version; ``replace``
    only succeeds while that version is still current.
    """

    def __init__(self, database_url: str):
        self.engine = create_engine(database_url)
        self.async_session = create_sessionmaker(self.engine)

    async def ensure_ready(self) -> None:
        try:
            await create_tables(self.engine)
        except SQLAlchemyError as e:
            raise StorageError("Document table unavailable", details=str(e)) from e
        logger.info("SQL document store ready")

    async def create(self, doc: dict) -> dict:
        try:
            async with self.async_session() as session:
                session.add(PhotoDocument(
                    id=doc["id"],
                    created_at=doc["createdAt"],
                    version=1,
                    body=doc,
                ))
                await session.commit()
        except SQLAlchemyError as e:
            raise StorageError("Document create failed", details=str(e)) from e
        return doc

    async def read(self, doc_id: str) -> VersionedDocument | None:
        try:
            async with self.async_session() as session:
                row = await session.get(PhotoDocument, doc_id)
        except SQLAlchemyError as e:
            raise StorageError("Document read failed", details=str(e)) from e
        if row is None:
            return None
        return VersionedDocument(body=dict(row.body), etag=str(row.version))

    async def replace(self, doc_id: str, doc: dict, etag: str) -> dict:
        try:
            async with self.async_session() as session:
                result = await session.execute(
                    update(PhotoDocument)
                    .where(PhotoDocument.id == doc_id, PhotoDocument.version == int(etag))
                    .values(body=doc, version=PhotoDocument.version + 1)
                )
                await session.commit()
        except SQLAlchemyError as e:
            raise StorageError("Document replace failed", details=str(e)) from e
        if result.rowcount != 1:
            raise ConflictError(doc_id)
        return doc

    async def query_all(self) -> list[dict]:
        try:
            async with self.async_session() as session:
                result = await session.execute(
                    select(PhotoDocument).order_by(PhotoDocument.created_at.desc())
                )
                rows = result.scalars().all()
        except SQLAlchemyError as e:
            raise StorageError("Document query failed", details=str(e)) from e
        return [dict(r.body) for r in rows]

    async def close(self) -> None:
        await self.engine.dispose()

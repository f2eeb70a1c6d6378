import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from snaphub.config import Settings
from snaphub.main import create_app
from snaphub.services.photo_service import PhotoService
from snaphub.storage.local_blob import LocalBlobStore
from snaphub.storage.sql import SqlDocumentStore

MEDIA_URL = "http://test/media"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        blob_backend="local",
        document_backend="sql",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'db.sqlite3'}",
        data_dir=str(tmp_path / "data"),
        media_base_url=MEDIA_URL,
        cors_origins="https://snaphub.example",
        _env_file=None,
    )


@pytest_asyncio.fixture
async def blob_store(settings):
    store = LocalBlobStore(settings.data_dir, settings.blob_container, settings.media_url)
    await store.ensure_ready()
    yield store
    await store.close()


@pytest_asyncio.fixture
async def document_store(settings):
    store = SqlDocumentStore(settings.database_url)
    await store.ensure_ready()
    yield store
    await store.close()


@pytest.fixture
def photo_service(blob_store, document_store):
    return PhotoService(blob_store, document_store, max_retries=5)


@pytest_asyncio.fixture
async def client(settings, photo_service):
    app = create_app(settings, photo_service=photo_service)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

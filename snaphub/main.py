"""ASGI app factory; serve with ``uvicorn --factory snaphub.main:create_app`` or ``python -m snaphub``."""
import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles

from snaphub.config import Settings
from snaphub.routers.photos import router as photos_router
from snaphub.services.photo_service import PhotoService
from snaphub.storage import build_blob_store, build_document_store
from snaphub.utils.cors import AllowListCORSMiddleware
from snaphub.utils.exceptions import ConfigurationError, register_exception_handlers

logger = logging.getLogger(__name__)

SERVICE_NAME = "SnapHub API"


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    # tests hand in a ready-made service
    if getattr(app.state, "photo_service", None) is not None:
        yield
        return

    settings: Settings = app.state.settings
    missing = settings.missing_required()
    if missing:
        raise ConfigurationError(f"Missing env var(s): {', '.join(missing)}")

    blob_store = build_blob_store(settings)
    document_store = build_document_store(settings)
    try:
        await blob_store.ensure_ready()
        await document_store.ensure_ready()
        logger.info(
            "Connected to blob store (%s) and document store (%s)",
            settings.blob_backend, settings.document_backend,
        )
        app.state.photo_service = PhotoService(
            blob_store, document_store, max_retries=settings.comment_max_retries
        )
        yield
    finally:
        app.state.photo_service = None
        await blob_store.close()
        await document_store.close()


def create_app(settings: Settings | None = None, photo_service: PhotoService | None = None) -> FastAPI:
    settings = settings or Settings()
    configure_logging(settings)

    app = FastAPI(
        title=SERVICE_NAME,
        description="Photo upload, search and comments with ratings",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.photo_service = photo_service

    app.add_middleware(
        AllowListCORSMiddleware,
        allowlist=settings.cors_allowlist,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(photos_router, prefix="/api")

    if settings.blob_backend == "local":
        # only the blob container is public; data_dir may also hold the SQLite file
        app.mount(
            f"/media/{settings.blob_container}",
            StaticFiles(directory=os.path.join(settings.data_dir, settings.blob_container), check_dir=False),
            name="media",
        )

    @app.get("/", response_class=PlainTextResponse)
    async def home():
        return f"{SERVICE_NAME} is running. Try /health or /api/photos"

    @app.get("/health")
    async def health_check():
        return {"ok": True, "service": SERVICE_NAME}

    return app

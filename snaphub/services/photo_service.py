"""Photo upload, search and comment/rating aggregation."""
import logging
import math
import re
import uuid
from datetime import datetime, timezone
from typing import Any

import pydantic

from snaphub.schemas.photo import Comment, Photo
from snaphub.storage import BlobStore, DocumentStore
from snaphub.utils.exceptions import (
    ConflictError,
    NotFound,
    StorageError,
    ValidationError,
    storage_failure,
)

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = "jpg"
DEFAULT_CONTENT_TYPE = "image/jpeg"
MAX_RATING = 5

_EXTENSION_RE = re.compile(r"[A-Za-z0-9]+")


def utc_now_iso() -> str:
    """Current UTC time as ``2024-01-31T12:00:00.000Z``."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def file_extension(filename: str | None) -> str:
    # client paths may use either separator
    basename = re.split(r"[\\/]", filename or "")[-1]
    if "." not in basename:
        return DEFAULT_EXTENSION
    ext = basename.rsplit(".", 1)[1]
    return ext if _EXTENSION_RE.fullmatch(ext) else DEFAULT_EXTENSION


def parse_people(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [p.strip() for p in raw.split(",") if p.strip()]


def coerce_rating(value: Any) -> int | float:
    """Turn client input into a rating in [0, 5].

    Missing, non-numeric and non-finite input all count as 0. Whole numbers
    come back as ``int``.
    """
    if value is None or value is False or value == "":
        return 0
    if value is True:
        return 1
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(number):
        return 0
    number = max(0.0, min(float(MAX_RATING), number))
    return int(number) if number.is_integer() else number


def round_rating(value: float) -> float:
    # half up, one decimal
    return math.floor(value * 10 + 0.5) / 10


def apply_rating(photo: Photo, rating: int | float) -> None:
    """Fold a new comment's rating into ``avg_rating``/``rating_count``.

    Expects the comment to be in ``photo.comments`` already. Unrated comments
    leave both fields alone.
    """
    if rating <= 0:
        return

    count = photo.rating_count + 1
    rated = [c.rating for c in photo.comments if c.rating > 0]
    if len(rated) == count:
        total = sum(rated)
    else:
        # comment history doesn't match the counter (older documents)
        total = photo.avg_rating * photo.rating_count + rating

    photo.rating_count = count
    photo.avg_rating = round_rating(total / count)


def load_photo(doc: dict) -> Photo:
    try:
        return Photo.model_validate(doc)
    except pydantic.ValidationError as e:
        raise StorageError("Malformed photo document", details=str(e)) from e


def matches_query(photo: Photo, q: str) -> bool:
    haystack = " ".join([photo.title, photo.caption, photo.location, *photo.people])
    return q in haystack.lower()


class PhotoService:
    def __init__(self, blob_store: BlobStore, document_store: DocumentStore, max_retries: int = 5):
        self.blob_store = blob_store
        self.document_store = document_store
        self.max_retries = max(1, max_retries)

    async def upload_photo(
        self,
        data: bytes | None,
        filename: str | None = None,
        content_type: str | None = None,
        title: str | None = None,
        caption: str | None = None,
        location: str | None = None,
        people: str | None = None,
    ) -> Photo:
        if data is None:
            raise ValidationError("Missing file")

        photo_id = str(uuid.uuid4())
        blob_name = f"{photo_id}.{file_extension(filename)}"

        with storage_failure("Upload failed"):
            # a blob whose document create fails below is left behind
            image_url = await self.blob_store.upload(
                blob_name, data, content_type or DEFAULT_CONTENT_TYPE
            )

            photo = Photo(
                id=photo_id,
                blob_name=blob_name,
                image_url=image_url,
                title=title or "",
                caption=caption or "",
                location=location or "",
                people=parse_people(people),
                created_at=utc_now_iso(),
            )
            await self.document_store.create(photo.to_document())

        logger.info("Uploaded photo %s (%d bytes)", photo_id, len(data))
        return photo

    async def list_photos(self, q: str | None = None) -> list[Photo]:
        with storage_failure("Fetch failed"):
            docs = await self.document_store.query_all()
            photos = [load_photo(d) for d in docs]

        query = (q or "").strip().lower()
        if not query:
            return photos
        return [p for p in photos if matches_query(p, query)]

    async def get_photo(self, photo_id: str) -> Photo:
        with storage_failure("Fetch failed"):
            found = await self.document_store.read(photo_id)
            if found is None:
                raise NotFound("Not found")
            return load_photo(found.body)

    async def add_comment(
        self,
        photo_id: str,
        comment: Any,
        name: str | None = None,
        rating: Any = None,
    ) -> Photo:
        text = str(comment).strip() if comment is not None else ""
        if not text:
            raise ValidationError("Comment is required")

        safe_rating = coerce_rating(rating)
        author = (name or "").strip() or "Anonymous"

        # optimistic concurrency: re-run the read-modify-write on a stale etag
        for attempt in range(1, self.max_retries + 1):
            with storage_failure("Comment failed"):
                found = await self.document_store.read(photo_id)
                if found is None:
                    raise NotFound("Not found")

                photo = load_photo(found.body)
                photo.comments.insert(0, Comment(
                    id=str(uuid.uuid4()),
                    name=author,
                    comment=text,
                    rating=safe_rating,
                    created_at=utc_now_iso(),
                ))
                apply_rating(photo, safe_rating)

                try:
                    await self.document_store.replace(photo_id, photo.to_document(), found.etag)
                except ConflictError:
                    logger.warning(
                        "Concurrent update on photo %s (attempt %d/%d), retrying",
                        photo_id, attempt, self.max_retries,
                    )
                    continue

            logger.info("Added comment to photo %s (rating %s)", photo_id, safe_rating)
            return photo

        raise StorageError("Comment failed", details="Concurrent update conflict")

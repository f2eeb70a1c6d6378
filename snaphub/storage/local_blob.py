import logging
import os

from snaphub.utils.exceptions import StorageError

logger = logging.getLogger(__name__)


class LocalBlobStore:
    """Blob store on the local filesystem, for development and tests.

    Files land in ``{data_dir}/{container}/{name}`` and are served by the
    ``/media`` static mount, so the returned URL is ``{base_url}/{container}/{name}``.
    """

    def __init__(self, data_dir: str, container: str, base_url: str):
        self.root = os.path.join(data_dir, container)
        self.container = container
        self.base_url = base_url.rstrip("/")

    async def ensure_ready(self) -> None:
        try:
            os.makedirs(self.root, exist_ok=True)
        except OSError as e:
            raise StorageError("Blob container unavailable", details=str(e)) from e
        logger.info("Local blob store ready at %s", self.root)

    async def upload(self, name: str, data: bytes, content_type: str) -> str:
        path = os.path.join(self.root, name)
        try:
            with open(path, "wb") as f:
                f.write(data)
        except OSError as e:
            raise StorageError("Blob upload failed", details=str(e)) from e
        return f"{self.base_url}/{self.container}/{name}"

    async def close(self) -> None:
        return None

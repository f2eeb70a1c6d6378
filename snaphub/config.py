from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    azure_storage_connection_string: str = ""
    blob_container: str = "photos"

    cosmos_endpoint: str = ""
    cosmos_key: str = ""
    cosmos_db: str = "snaphub"
    cosmos_container: str = "Photos"

    port: int = 3000
    cors_origins: str = "*"  # comma-separated, "*" = any origin
    log_level: str = "INFO"

    blob_backend: Literal["azure", "local"] = "azure"
    document_backend: Literal["cosmos", "sql"] = "cosmos"

    # local backends (dev / tests)
    database_url: str = "sqlite+aiosqlite:///./data/db.sqlite3"
    data_dir: str = "./data"
    media_base_url: str = ""

    comment_max_retries: int = 5

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @property
    def cors_allowlist(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def media_url(self) -> str:
        base = self.media_base_url or f"http://localhost:{self.port}/media"
        return base.rstrip("/")

    def missing_required(self) -> list[str]:
        """Names of the env vars the selected backends need but that are unset."""
        missing = []
        if self.blob_backend == "azure" and not self.azure_storage_connection_string:
            missing.append("AZURE_STORAGE_CONNECTION_STRING")
        if self.document_backend == "cosmos":
            if not self.cosmos_endpoint:
                missing.append("COSMOS_ENDPOINT")
            if not self.cosmos_key:
                missing.append("COSMOS_KEY")
        return missing

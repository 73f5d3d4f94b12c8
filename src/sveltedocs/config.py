"""Runtime configuration loaded from SVELTE_DOCS_* environment variables."""

from datetime import timedelta
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

RefreshMode = Literal["daily", "weekly"]

REFRESH_INTERVALS: dict[str, timedelta] = {
    "daily": timedelta(hours=24),
    "weekly": timedelta(days=7),
}


class Settings(BaseSettings):
    """Strictly typed settings for the indexer, store and server."""

    model_config = SettingsConfigDict(
        env_prefix="SVELTE_DOCS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    database_path: str = Field(default="svelte-docs.db", description="SQLite database file")
    base_url: str = Field(default="https://svelte.dev", description="Host serving the llms.txt files")
    http_timeout: float = Field(default=30.0, gt=0, description="HTTP request timeout in seconds")
    refresh_mode: RefreshMode = Field(default="daily", description="How often stored docs go stale")
    max_fetch_workers: int = Field(default=3, ge=1, description="Concurrent package fetches during init")

    doc_batch_size: int = Field(default=500, ge=1, description="Documents written per transaction")
    index_batch_size: int = Field(default=100, ge=1, description="Documents per index sub-batch")

    result_limit: int = Field(default=10, ge=1)
    suggestion_limit: int = Field(default=5, ge=1)

    @property
    def refresh_interval(self) -> timedelta:
        return REFRESH_INTERVALS[self.refresh_mode]

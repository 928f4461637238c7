"""Runtime configuration for billsync."""

from __future__ import annotations

from functools import lru_cache
from typing import List, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RemoteRepositoryConfig(BaseModel):
    """A configured remote repository (id plus base URL)."""

    id: str
    url: str
    username: Optional[str] = None
    password: Optional[str] = None


class Settings(BaseSettings):
    """Configuration values mapped from ``BILLSYNC_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="BILLSYNC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field("billsync")
    version: str = Field("0.3.0")
    log_level: str = Field("INFO")

    # Bill generation
    bill_path: str = Field("target/bill.txt")
    ignore_snapshots: bool = Field(True)
    closure_max_passes: int = Field(25, ge=1)
    skip_cached_seeds: bool = Field(False)

    # Repositories used for resolution; also candidates for the sync target
    remote_repositories: List[RemoteRepositoryConfig] = Field(default_factory=list)
    http_timeout: float = Field(30.0, gt=0)

    # Tree sync
    sync_workers: int = Field(1, ge=1)

    # HTTP API: client supplied bill paths and folder targets must live under this
    # directory; unset means the API only uses bill_path and configured repositories
    api_base_dir: Optional[str] = Field(None)


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance for dependency injection."""
    return Settings()

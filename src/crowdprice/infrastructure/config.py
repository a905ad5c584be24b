"""Settings loaded from the environment using pydantic-settings.

Every variable is prefixed with ``CROWDPRICE_``, e.g.
``CROWDPRICE_DATA_DIR=/var/lib/crowdprice`` or ``CROWDPRICE_USER=u-42``.
A ``.env`` file in the working directory is read as well.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):

    model_config = SettingsConfigDict(
        env_prefix="CROWDPRICE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Storage
    # -------------------------------------------------------------------------
    data_dir: Path = Field(
        default=Path("data"), description="Directory holding the JSON collections"
    )
    storage_timeout_seconds: float = Field(
        default=5.0, gt=0, description="Upper bound for acquiring a collection lock"
    )

    # -------------------------------------------------------------------------
    # Identity
    # -------------------------------------------------------------------------
    user: str | None = Field(
        default=None, description="Signed-in user ID for the environment identity provider"
    )
    identity_retry_attempts: int = Field(
        default=3, ge=1, le=3, description="Attempts for the session-start profile lookup"
    )
    identity_retry_wait_seconds: float = Field(
        default=1.0, ge=0, description="Linear backoff step between lookup attempts"
    )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------
    featured_window: int = Field(
        default=10, ge=1, description="Recent verified prices scanned for featured products"
    )
    search_limit: int = Field(default=20, ge=1, description="Maximum search results")

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING", description="Logging level"
    )
    log_format: Literal["console", "json"] = Field(
        default="console", description="Human-readable or JSON log lines"
    )


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings (cached)."""
    return Settings()

"""
Configuration management for twse_disclosures.

Uses pydantic-settings for type-safe configuration with automatic
environment variable loading and validation.
"""

from functools import lru_cache
from pathlib import Path
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from twse_disclosures.constants import (
    DEFAULT_MAX_WORKERS,
    DETAIL_BASE_URL,
    DETAIL_TIMEOUT,
    LISTING_TIMEOUT,
    LISTING_URL,
)

MISSING_STOCK_IDS_MESSAGE = "No stock IDs provided. Please set the STOCK_IDS environment variable."


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    START_DATE / END_DATE are passed to MOPS as-is, so they must already be
    in the format the service expects (e.g. "113/01/01").
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore extra env vars
    )

    # Run inputs
    start_date: str = Field(
        default="",
        description="Listing start date (SDATE)",
    )
    end_date: str = Field(
        default="",
        description="Listing end date (EDATE)",
    )
    stock_ids: Annotated[list[str], NoDecode] = Field(
        default_factory=list,
        description="Stock ids to report on, comma-separated in STOCK_IDS",
    )

    # MOPS endpoints
    listing_url: str = Field(
        default=LISTING_URL,
        description="Bulk listing endpoint (POST)",
    )
    detail_base_url: str = Field(
        default=DETAIL_BASE_URL,
        description="Detail page endpoint (GET)",
    )

    # Networking
    request_timeout: float = Field(
        default=LISTING_TIMEOUT,
        gt=0,
        description="Timeout for the bulk listing request, in seconds",
    )
    detail_timeout: float = Field(
        default=DETAIL_TIMEOUT,
        gt=0,
        description="Timeout for each detail page request, in seconds",
    )
    max_workers: int = Field(
        default=DEFAULT_MAX_WORKERS,
        ge=1,
        description="Concurrent detail page fetches",
    )

    # Output
    output_dir: Path = Field(
        default=Path("."),
        description="Directory the report is written to",
    )

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Strip whitespace from string values."""
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("stock_ids", mode="before")
    @classmethod
    def split_stock_ids(cls, v: str | list[str] | None) -> list[str]:
        """Split "1101, 2330" into ["1101", "2330"], dropping blanks."""
        if v is None:
            return []
        if isinstance(v, str):
            v = v.split(",")
        return [str(item).strip() for item in v if str(item).strip()]


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


def require_stock_ids(settings: Settings) -> list[str]:
    """Get stock ids from settings, raising if none are configured."""
    if not settings.stock_ids:
        raise ValueError(MISSING_STOCK_IDS_MESSAGE)
    return list(settings.stock_ids)

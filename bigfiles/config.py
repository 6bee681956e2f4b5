"""
Configuration settings for the BigFiles CSV Processor.

Uses Pydantic Settings to load environment variables for store locations,
generation sizes, progress cadence and logging.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    # Stores
    sales_path: str = Field("sales.csv", alias="SALES_PATH")
    report_path: str = Field("sales_report.csv", alias="REPORT_PATH")

    # Generation defaults
    total_records: int = Field(1_000_000, alias="TOTAL_RECORDS", gt=0)
    batch_size: int = Field(10_000, alias="BATCH_SIZE", gt=0)
    seed: Optional[int] = Field(None, alias="GENERATOR_SEED")

    # Aggregation
    progress_interval: int = Field(100_000, alias="PROGRESS_INTERVAL", gt=0)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]

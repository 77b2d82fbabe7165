"""
Configuration settings for the transaction query engine.

Uses Pydantic Settings to load environment variables (or a local `.env`) for the
data source, the default client used by by-name queries, result persistence and
logging.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Data
    transactions_path: Path = Field(Path("transactions.json"), alias="TRANSACTIONS_PATH")
    client_name: Optional[str] = Field(None, alias="CLIENT_NAME")
    results_dir: Path = Field(Path("results"), alias="RESULTS_DIR")

    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

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

"""Application settings, loaded from the environment.

Every setting can be overridden with a ``STOREFRONT_`` prefixed
environment variable or a ``.env`` file in the working directory.
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):

    # Directory holding products.json and order_totals.json
    data_dir: Path = Path("data")

    log_level: str = "WARNING"
    log_json: bool = False

    # Initial state of the "in stock only" filter for a new session
    default_in_stock_only: bool = True

    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_",
        env_file=".env",
        extra="ignore",
    )

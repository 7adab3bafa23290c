"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="BIKEFIT_",
        case_sensitive=False,
    )

    app_name: str = "BikeFit"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"
    log_file: Optional[str] = None

    host: str = "0.0.0.0"
    port: int = 8000

    cors_origins: list[str] = ["*"]

    # Calculator settings
    max_bikes_per_request: int = 20

    # Search settings
    search_result_limit: int = 100
    max_search_records: int = 20000
    default_reach_range: float = 5.0
    default_stack_range: float = 5.0


@lru_cache
def get_settings() -> Settings:
    return Settings()

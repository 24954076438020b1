from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "ordershop"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"

    # Database
    DATABASE_URL: str = "sqlite:///./ordershop.db"
    DATABASE_ECHO: bool = False

    # Fetch plans
    # Upper bound on ids per IN (...) list when batch-loading order items
    BATCH_FETCH_SIZE: int = Field(default=100, ge=1, le=1000)
    # Hard cap on search results for pageable strategies
    MAX_SEARCH_RESULTS: int = Field(default=1000, ge=1)

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "console"
    LOG_SQL: bool = False

    # Metrics
    ENABLE_METRICS: bool = True

    # Seed the sample members and orders when creating initial data
    SEED_SAMPLE_DATA: bool = False


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()

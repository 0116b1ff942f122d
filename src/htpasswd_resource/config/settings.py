"""Runtime settings loaded from environment variables."""

from functools import lru_cache
from typing import Annotated

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PositiveInt = Annotated[int, Field(gt=0)]


class Settings(BaseSettings):
    """Environment-driven provider settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = Field(default="INFO", validation_alias="HTPASSWD_LOG_LEVEL")
    hash_concurrency: PositiveInt = Field(
        default=4,
        validation_alias="HTPASSWD_HASH_CONCURRENCY",
    )


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Load and cache provider settings."""

    return Settings()

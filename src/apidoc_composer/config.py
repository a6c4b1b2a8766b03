"""Environment-driven settings for apidoc-composer."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings, read from ``APIDOC_*`` variables or a ``.env`` file."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="APIDOC_", case_sensitive=False, extra="ignore")

    host: str = Field(default="", description="Base host prepended to every resolved path")
    catalog: str = Field(default=".", description="Directory holding api_data.json and api_project.json")
    log_level: str = Field(default="WARNING")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()

"""Request manager configuration via environment variables."""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Settings loaded from environment variables."""

    # Server
    DEBUG: bool = False
    LOG_LEVEL: str = "info"

    # Request parsing
    JSON_CONTENT_TYPES: list[str] = ["application/json", "application/x-json"]
    READ_ONLY_METHODS: list[str] = ["GET", "HEAD"]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()

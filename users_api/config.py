"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - PAGINATOR_LIMIT_DEFAULT is required and > 0; missing or invalid fails at startup
    - get_settings() is cached (lru_cache): single instance per process
    - Defaults provided for every other setting
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://users:users@db:5432/users"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """postgresql:// URLs are rewritten for the asyncpg driver."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10
    database_echo: bool = False

    # Pagination
    paginator_limit_default: int = Field(gt=0)

    # Requests
    request_timeout_seconds: float | None = Field(default=5.0, gt=0)

    # API
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: list[str] = ["*"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()

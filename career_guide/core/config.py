"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # PostgreSQL
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "career_user"
    postgres_password: str = "password"
    postgres_db: str = "career_guide"

    # Full URL override (e.g. sqlite:///./career_guide.db for local work)
    database_url: Optional[str] = None

    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_echo: bool = False

    # In-process response cache
    cache_ttl_seconds: float = 300
    cache_max_entries: int = 1000
    cache_sweep_interval_seconds: float = 300
    cache_stale_while_revalidate: int = 600

    # List endpoints
    default_page_limit: int = 50
    max_page_limit: int = 100

    # Identity header populated by the external auth layer
    user_id_header: str = "X-User-Id"

    # App
    api_prefix: str = "/api"
    cors_origins: List[str] = ["*"]
    debug: bool = False
    log_level: str = "INFO"
    create_tables_on_startup: bool = False

    @property
    def sqlalchemy_url(self) -> str:
        """Connection URL handed to SQLAlchemy."""
        if self.database_url:
            return self.database_url
        return (
            f"postgresql+psycopg2://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def cache_control_header(self) -> str:
        return (
            f"public, max-age={int(self.cache_ttl_seconds)}, "
            f"stale-while-revalidate={self.cache_stale_while_revalidate}"
        )

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()

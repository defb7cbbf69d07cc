# app/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AliasChoices, Field


class Settings(BaseSettings):
    # redis://... uses Redis, any other SQLAlchemy URL uses the kv_store table
    STORE_URL: str = Field(
        default="redis://localhost:6379/0",
        validation_alias=AliasChoices("STORE_URL", "REDIS_URL"),
    )
    STORE_KEY: str = "tickets"

    APP_NAME: str = "Help Desk API"
    APP_DESC: str = "A simple Help Desk API for managing tickets"
    APP_VERSION: str = "1.0.0"

    HOST: str = "127.0.0.1"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    # CORS origins, comma separated
    CORS_ORIGINS: str = "*"

    # optional directory of static assets served from /
    STATIC_DIR: str | None = None

    # Pydantic v2 style config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings"]

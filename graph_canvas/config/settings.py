"""
Configuration settings for Graph Canvas.
Uses pydantic-settings for environment variable management.
"""

from functools import lru_cache
from typing import List

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..utils.constants import DEFAULT_DB_PATH, DEFAULT_LOG_LEVEL, MEMORY_DB_PATH


class DatabaseSettings(BaseSettings):
    """DuckDB graph storage configuration."""

    model_config = SettingsConfigDict(env_prefix="GRAPH_DB_")

    path: str = Field(
        default=DEFAULT_DB_PATH,
        description="DuckDB database path. Use ':memory:' for an in-memory database.",
    )

    @field_validator("path")
    @classmethod
    def _default_when_blank(cls, value: str) -> str:
        return value.strip() or DEFAULT_DB_PATH

    @property
    def is_memory(self) -> bool:
        return self.path == MEMORY_DB_PATH


class APISettings(BaseSettings):
    """HTTP server configuration."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=8000, ge=1, le=65535, description="Bind port")
    cors_allowed_origins: str = Field(
        default="http://localhost:5173,http://127.0.0.1:5173,http://localhost:3000",
        description="Comma-separated list of allowed CORS origins",
    )

    @property
    def allowed_origins(self) -> List[str]:
        return [
            origin.strip()
            for origin in self.cors_allowed_origins.split(",")
            if origin.strip()
        ]


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="Graph Canvas API", description="Application name")
    environment: str = Field(default="development", description="Deployment environment")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default=DEFAULT_LOG_LEVEL, description="Logging level")

    # Sub-configurations
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    api: APISettings = Field(default_factory=APISettings)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Loads ``.env`` into the process environment first so the nested
    sub-settings see the same values as the top-level ones.
    """
    load_dotenv()
    return Settings()

"""
Application Settings

Configuration classes using Pydantic for validation.
"""

from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables
load_dotenv()


class APIConfig(BaseSettings):
    """Blizzard API configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="BLIZZARD_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    client_id: Optional[str] = Field(
        default=None,
        description="Blizzard API client ID"
    )
    client_secret: Optional[str] = Field(
        default=None,
        description="Blizzard API client secret"
    )
    locale: str = Field(
        default="en_US",
        description="Blizzard API locale"
    )
    oauth_url: str = Field(
        default="https://oauth.battle.net/token",
        description="OAuth2 token endpoint"
    )

    # Transport
    timeout: int = Field(default=30, description="Request timeout in seconds")
    max_retries: int = Field(default=3, description="Retries on network errors")
    rate_limit: Optional[int] = Field(
        default=100,
        description="Max concurrent upstream requests"
    )

    # CN is served by a separate gateway we have no credentials for
    unsupported_regions: List[str] = Field(
        default=["cn"],
        description="Regions rejected before any HTTP call"
    )

    @field_validator("unsupported_regions")
    @classmethod
    def lower_regions(cls, v):
        """Region codes are compared lower-case."""
        return [region.lower() for region in v]


class DatabaseConfig(BaseSettings):
    """Database configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="DATABASE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    url: str = Field(
        default="sqlite+aiosqlite:///wowguild.db",
        description="Database connection URL"
    )
    echo: bool = Field(default=False, description="Echo SQL statements")
    pool_size: int = Field(default=20, description="Connection pool size")
    max_overflow: int = Field(default=0, description="Max overflow connections")

    @field_validator("url")
    @classmethod
    def fix_postgres_url(cls, v):
        """Fix Heroku postgres URL format."""
        if v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql+asyncpg://", 1)
        return v


class ServerConfig(BaseSettings):
    """HTTP server settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    reload: bool = Field(default=False)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    app_name: str = Field(default="WoW Guild Cache")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")

    api: APIConfig = Field(default_factory=APIConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance

    Returns:
        Singleton Settings instance
    """
    return Settings()

"""Application configuration using Pydantic Settings with YAML support.

This module provides centralized configuration management with:
- YAML-based configuration files organized by domain
- Environment-specific overrides (development, test, production)
- Environment variable loading for secrets
- Computed properties for derived values (Redis URL)
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict

from .yaml_source import MultiYamlConfigSettingsSource


if TYPE_CHECKING:
    from pydantic_settings import PydanticBaseSettingsSource


# =============================================================================
# Nested Configuration Models (from YAML)
# =============================================================================


class AppSettings(BaseModel):
    """Application identity settings."""

    name: str = "OilInfo API"
    version: str = "1.0.0"
    debug: bool = False


class ServerSettings(BaseModel):
    """Server configuration settings."""

    host: str = "0.0.0.0"  # noqa: S104
    port: int = 8080
    static_dir: str | None = None
    shutdown_timeout: int = 1
    slow_request_threshold: float = 2.0


class ApiSettings(BaseModel):
    """API configuration settings."""

    prefix: str = ""
    cors_origins: list[str] = ["*"]


class RedisSettings(BaseModel):
    """Redis configuration settings."""

    host: str = "localhost"
    port: int = 6379
    user: str | None = None  # Redis ACL username (Redis 6.0+)
    cache_db: int = 0
    key_prefix: str = "oilinfo"
    max_connections: int = 20


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    level: str = "INFO"
    format: str = "json"


class BangchakSettings(BaseModel):
    """Fuel-price provider settings."""

    url: str = "https://oil-price.bangchak.co.th/ApiOilPrice2"
    timeout: float = 10.0
    user_agent: str = "OilInfoApp/1.0"


class ExchangeRateSettings(BaseModel):
    """Currency-exchange provider settings."""

    url: str = "https://api.exchangerate-api.com/v4/latest/USD"
    timeout: float = 5.0


class UpstreamSettings(BaseModel):
    """External data providers."""

    bangchak: BangchakSettings = BangchakSettings()
    exchange_rate: ExchangeRateSettings = ExchangeRateSettings()


class CacheSettings(BaseModel):
    """Cache lifetimes per view, in seconds."""

    current_prices_ttl: int = 3600
    brand_comparison_ttl: int = 3600
    historical_prices_ttl: int = 21600
    world_prices_ttl: int = 3600


class HistorySettings(BaseModel):
    """Historical trend generation settings."""

    days: int = 30
    timezone: str = "Asia/Bangkok"


# =============================================================================
# Main Settings Class
# =============================================================================


class Settings(BaseSettings):
    """Application settings with YAML + environment variable support.

    Configuration is loaded from multiple sources with the following priority
    (highest to lowest):
    1. Environment variables
    2. .env file (secrets only)
    3. Environment-specific YAML files (config/environments/{APP_ENV}/)
    4. Base YAML files (config/base/)
    5. Default values in code

    Environment variables can override any setting using the nested delimiter '__'.
    For example: REDIS__HOST=prod-redis overrides redis.host.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        case_sensitive=False,
        env_nested_delimiter="__",
    )

    APP_ENV: str = "development"

    app: AppSettings = AppSettings()
    server: ServerSettings = ServerSettings()
    api: ApiSettings = ApiSettings()
    redis: RedisSettings = RedisSettings()
    logging: LoggingSettings = LoggingSettings()
    upstream: UpstreamSettings = UpstreamSettings()
    cache: CacheSettings = CacheSettings()
    history: HistorySettings = HistorySettings()

    # Secrets (from .env only - never in YAML)
    REDIS_PASSWORD: str = ""

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the YAML source between .env and Docker secrets."""
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            MultiYamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    @property
    def redis_cache_url(self) -> str:
        """Build the Redis cache URL.

        URL format: redis://[user:password@]host:port/db
        """
        auth_part = ""
        if self.redis.user and self.REDIS_PASSWORD:
            auth_part = f"{self.redis.user}:{self.REDIS_PASSWORD}@"
        elif self.REDIS_PASSWORD:
            auth_part = f":{self.REDIS_PASSWORD}@"
        elif self.redis.user:
            auth_part = f"{self.redis.user}@"

        return (
            f"redis://{auth_part}{self.redis.host}:{self.redis.port}"
            f"/{self.redis.cache_db}"
        )

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.APP_ENV == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.APP_ENV == "production"

    @property
    def is_testing(self) -> bool:
        """Check if running in test environment."""
        return self.APP_ENV == "test"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Using lru_cache ensures settings are only loaded once per process.
    """
    return Settings()

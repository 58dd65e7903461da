"""StaffLedger configuration.

Application settings loaded from environment variables with STAFFLEDGER_ prefix.

Example:
    >>> from staffledger.core.config import get_settings
    >>> settings = get_settings(log_level="DEBUG")
    >>> settings.log_level
    'DEBUG'
    >>> settings.database_url
    'memory://'
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Loads from environment variables with STAFFLEDGER_ prefix.

    Example:
        >>> from staffledger.core.config import Settings
        >>> s = Settings(pension_service_url="http://pensions:9000")
        >>> s.pension_service_url
        'http://pensions:9000'
        >>> s.refresh_strategy
        'concurrent'
    """

    model_config = SettingsConfigDict(
        env_prefix="STAFFLEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage
    database_url: str = Field(
        default="memory://",
        description="Store URL: memory:// or any SQLAlchemy URL",
    )

    # Pension lookup
    pension_service_url: str = Field(
        default="http://localhost:8082",
        description="Base URL of the pension lookup service",
    )
    lookup_timeout: float = Field(default=5.0, ge=0.1, description="Seconds per lookup")
    lookup_concurrency: int = Field(default=10, ge=1, le=1000)
    refresh_strategy: Literal["concurrent", "sequential"] = Field(default="concurrent")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: Literal["console", "plain"] = Field(default="console")

    # Server
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8080, ge=1, le=65535)


def get_settings(**overrides: Any) -> Settings:
    """Get settings with optional overrides.

    Example:
        >>> from staffledger.core.config import get_settings
        >>> s = get_settings(lookup_timeout=0.5)
        >>> s.lookup_timeout
        0.5
    """
    return Settings(**overrides)

# src/xchange/config/settings.py
"""
Settings - Pydantic-based Configuration Management

Provides centralized configuration management using Pydantic Settings.
The API endpoint and access key are supplied at startup through the
environment (or a .env file) and are never baked into the package.

Files that USE this module:
- xchange.app (builds every component from settings)
- xchange.adapters.providers.exchangerate_api (endpoint, key and timeout)
- xchange.adapters.persistence.file_store (data directory)
- xchange.application.* (debounce window, history limit, default pair)

Files that this module USES:
- xchange.shared.validators (validation functions for settings)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

from pathlib import Path  # Object-oriented filesystem paths
from typing import Optional  # Type hints for optional values

from pydantic import Field, field_validator  # Data validation and field configuration
from pydantic_settings import BaseSettings, SettingsConfigDict  # Settings management with Pydantic

from xchange.shared.validators import validate_currency_code


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # --- Remote rate source ---
    api_base_url: str = Field(
        default="https://v6.exchangerate-api.com/v6", alias="EXCHANGE_API_BASE_URL"
    )
    api_key: str = Field(default="", alias="EXCHANGE_API_KEY")  # checked when the client is built
    base_currency: str = Field(default="USD", alias="BASE_CURRENCY")

    # --- HTTP Settings ---
    http_timeout_seconds: int = Field(default=10, alias="HTTP_TIMEOUT_SECONDS", ge=1, le=60)

    # --- Conversion ---
    default_from_currency: str = Field(default="USD", alias="DEFAULT_FROM_CURRENCY")
    default_to_currency: str = Field(default="EUR", alias="DEFAULT_TO_CURRENCY")
    debounce_ms: int = Field(default=500, alias="DEBOUNCE_MS", ge=0, le=10_000)
    history_limit: int = Field(default=10, alias="HISTORY_LIMIT", ge=1, le=1000)

    # --- Persistence ---
    data_dir: Path = Field(default=Path("./data"), alias="DATA_DIR")

    # --- Connectivity ---
    connectivity_probe_url: Optional[str] = Field(default=None, alias="CONNECTIVITY_PROBE_URL")
    connectivity_poll_seconds: int = Field(default=30, alias="CONNECTIVITY_POLL_SECONDS", ge=1, le=3600)
    refresh_on_reconnect: bool = Field(default=False, alias="REFRESH_ON_RECONNECT")

    # --- Logging ---
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")
    log_dir: Optional[str] = Field(default=None, alias="LOG_DIR")
    log_stdout: bool = Field(default=True, alias="XCHANGE_LOG_STDOUT")
    log_max_bytes: int = Field(default=10 * 1024 * 1024, alias="LOG_MAX_BYTES")  # 10MB
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT")

    @property
    def endpoint(self) -> str:
        """API root with the access key as a path segment (exchangerate-api v6 layout)."""
        return f"{self.api_base_url.rstrip('/')}/{self.api_key}"

    @property
    def probe_url(self) -> str:
        """URL used for connectivity probes; defaults to the API host."""
        return self.connectivity_probe_url or self.api_base_url

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000.0

    @field_validator("base_currency", "default_from_currency", "default_to_currency")
    @classmethod
    def validate_currency(cls, v: str) -> str:
        """Normalize and validate currency codes."""
        v = v.strip().upper()
        if not validate_currency_code(v):
            raise ValueError(f"Invalid currency code: {v!r}")
        return v

    @field_validator("api_base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("EXCHANGE_API_BASE_URL must be an http(s) URL")
        return v


# Global settings instance
settings = Settings()

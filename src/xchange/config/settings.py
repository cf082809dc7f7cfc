# src/xchange/config/settings.py
"""
Settings - Pydantic-based Configuration Management

Provides centralized configuration management using Pydantic Settings.
Supports environment variables with validation and an optional .env file.

Files that USE this module:
- xchange.app (loads settings for session, provider, notifier and logging)
- xchange.adapters.providers.erapi (API URL, pivot and timeout)
- xchange.application.exchanger (ExchangerSession.from_settings)

Files that this module USES:
- xchange.shared.validators (validation functions for settings)
- xchange.domain.models (Currency)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

from typing import Dict, Optional  # Type hints for mappings and optional values

from pydantic import Field, field_validator, model_validator  # Data validation and field configuration
from pydantic_settings import BaseSettings, SettingsConfigDict  # Settings management with Pydantic

from xchange.domain.errors import UnsupportedCurrencyError
from xchange.domain.models import Currency  # Supported currencies
from xchange.shared.validators import (
    validate_bot_token,  # Validate Telegram bot token format
    validate_channel_id,  # Validate Telegram chat/channel ID format
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # --- Rates ---
    rates_api_url: str = Field(default="https://open.er-api.com/v6/latest", alias="RATES_API_URL")
    pivot_currency: Currency = Field(default=Currency.EUR, alias="PIVOT_CURRENCY")
    rates_refresh_seconds: float = Field(default=10.0, alias="RATES_REFRESH_SECONDS", ge=1, le=3600)
    # Fixed rate table; when set, no network provider is used
    offline_rates: Optional[Dict[str, float]] = Field(default=None, alias="OFFLINE_RATES")

    # --- HTTP Settings ---
    http_timeout_seconds: int = Field(default=10, alias="HTTP_TIMEOUT_SECONDS", ge=1, le=60)

    # --- Exchange form defaults ---
    default_source_currency: Currency = Field(default=Currency.EUR, alias="DEFAULT_SOURCE_CURRENCY")
    default_destination_currency: Currency = Field(default=Currency.GBP, alias="DEFAULT_DESTINATION_CURRENCY")

    # --- Mock balances ---
    initial_balances: Dict[Currency, float] = Field(
        default_factory=lambda: {Currency.EUR: 1000.0, Currency.GBP: 1234.0},
        alias="INITIAL_BALANCES",
    )
    enforce_sufficient_balance: bool = Field(default=True, alias="ENFORCE_SUFFICIENT_BALANCE")

    # --- Telegram notifications (optional) ---
    telegram_bot_token: str = Field(default="", alias="TELEGRAM_BOT_TOKEN")
    telegram_chat_id: str = Field(default="", alias="TELEGRAM_CHAT_ID")

    # --- Logging ---
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")
    log_dir: Optional[str] = Field(default=None, alias="LOG_DIR")
    log_max_bytes: int = Field(default=10 * 1024 * 1024, alias="LOG_MAX_BYTES")  # 10MB
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT")

    @property
    def telegram_enabled(self) -> bool:
        """True when both a bot token and a target chat are configured."""
        return bool(self.telegram_bot_token and self.telegram_chat_id)

    @field_validator("pivot_currency", "default_source_currency", "default_destination_currency", mode="before")
    @classmethod
    def parse_currency(cls, v):
        """Accept lower-case or padded currency codes."""
        if not isinstance(v, str):
            return v
        try:
            return Currency.parse(v).value
        except UnsupportedCurrencyError as e:
            raise ValueError(str(e)) from e

    @field_validator("initial_balances")
    @classmethod
    def validate_balances(cls, v: Dict[Currency, float]) -> Dict[Currency, float]:
        """Balances must be non-negative."""
        for currency, amount in v.items():
            if amount < 0:
                raise ValueError(f"INITIAL_BALANCES[{currency.value}] must be non-negative")
        return v

    @field_validator("offline_rates")
    @classmethod
    def validate_offline_rates(cls, v: Optional[Dict[str, float]]) -> Optional[Dict[str, float]]:
        """Offline rates must be positive."""
        if v is not None:
            for code, rate in v.items():
                if rate <= 0:
                    raise ValueError(f"OFFLINE_RATES[{code}] must be positive")
        return v

    @field_validator("telegram_bot_token")
    @classmethod
    def validate_telegram_token(cls, v: str) -> str:
        """Validate bot token format."""
        if v and not validate_bot_token(v):
            raise ValueError("Invalid TELEGRAM_BOT_TOKEN format")
        return v

    @field_validator("telegram_chat_id")
    @classmethod
    def validate_telegram_chat(cls, v: str) -> str:
        """Validate chat ID format."""
        if v and not validate_channel_id(v):
            raise ValueError("Invalid TELEGRAM_CHAT_ID format")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level name."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError("LOG_LEVEL must be DEBUG, INFO, WARNING, ERROR or CRITICAL")
        return level

    @model_validator(mode="after")
    def check_offline_pivot(self) -> "Settings":
        """An offline table must price the pivot currency."""
        if self.offline_rates is not None:
            codes = {code.strip().upper() for code in self.offline_rates}
            if self.pivot_currency.value not in codes:
                raise ValueError("OFFLINE_RATES must include a rate for PIVOT_CURRENCY")
        return self


# Global settings instance
settings = Settings()

# src/fxrates/config/settings.py
"""
Settings - Pydantic-based Configuration Management

Provides centralized configuration management using Pydantic Settings.
Supports environment variables with validation and an optional .env file.

Files that USE this module:
- fxrates.app (loads settings for store location, bind address and logging)

Files that this module USES:
- fxrates.shared.validators (validation functions for settings)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

import logging  # Log level names
from pathlib import Path  # Object-oriented filesystem paths
from typing import Optional  # Type hints for optional values

from pydantic import Field, field_validator  # Data validation and field configuration
from pydantic_settings import BaseSettings, SettingsConfigDict  # Settings management with Pydantic

from fxrates.shared.validators import (
    validate_host,  # Validate bind address format
    validate_log_level,  # Validate logging level name
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Persistence ---
    rates_file: Path = Field(
        default=Path("./data/currency_rates.json"), alias="RATES_FILE"
    )

    # --- HTTP Server ---
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=5000, alias="PORT", ge=1, le=65535)

    # --- Logging ---
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")
    log_dir: Optional[str] = Field(default=None, alias="LOG_DIR")
    log_stdout: bool = Field(default=True, alias="FXRATES_LOG_STDOUT")
    log_max_bytes: int = Field(default=10 * 1024 * 1024, alias="LOG_MAX_BYTES")  # 10MB
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT")

    @property
    def log_level_value(self) -> int:
        """Numeric logging level for ``logging.basicConfig``."""
        return logging.getLevelName(self.log_level)

    @field_validator("host")
    @classmethod
    def validate_host(cls, v: str) -> str:
        """Validate bind address."""
        if not validate_host(v):
            raise ValueError("Invalid HOST format")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level name."""
        v = v.strip().upper()
        if not validate_log_level(v):
            raise ValueError("LOG_LEVEL must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL")
        return v

    def model_post_init(self, __context) -> None:
        """Post-initialization validation."""
        # Ensure data directory exists
        self.rates_file.parent.mkdir(parents=True, exist_ok=True)


# Global settings instance
settings = Settings()


# ============================================================================
# Deployment Instructions
# ============================================================================
#
# 1. Run the service in the background:
#    nohup python -m fxrates > fxrates.log 2>&1 &
#
# 2. Point it at another data file or port:
#    RATES_FILE=/srv/fx/currency_rates.json PORT=8080 python -m fxrates
#
# 3. Stop the service:
#    pkill -f "python -m fxrates"
#
# ============================================================================

"""Configuration management using pydantic-settings."""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Literal
import logging
import sys
import structlog


class InventorySettings(BaseSettings):
    """Inventory aggregation configuration loaded from environment variables.

    All settings prefixed with INVENTORY_ (e.g., INVENTORY_MAX_CONCURRENCY=32)
    """

    # Batch Processing
    max_concurrency: int = Field(
        default=16,
        ge=1,
        le=256,
        description="Maximum product configurations computed at once per batch"
    )
    fetch_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        le=300.0,
        description="Timeout for the bulk variant fetch (seconds)"
    )

    # Diagnostics
    log_inconsistencies: bool = Field(
        default=False,
        description="Debug-log negative thresholds and over-reserved stock once per batch"
    )

    # Flag Derivation
    low_quantity_policy: Literal["target", "option"] = Field(
        default="target",
        description=(
            "How isLowQuantity treats variants with options: 'target' compares the "
            "parent's available-to-sell against each option threshold, 'option' "
            "uses each option's own available-to-sell"
        )
    )

    model_config = SettingsConfigDict(
        env_prefix="INVENTORY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database Configuration
    database_url: str
    database_pool_size: int = 10
    database_max_overflow: int = 5

    log_level: str = "INFO"
    environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# Global settings instances
settings = Settings()
inventory_settings = InventorySettings()


def configure_logging(log_level: str = "INFO") -> None:
    """Configure structlog for JSON logging."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper(), logging.INFO),
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


configure_logging(settings.log_level)

"""
Application configuration.

Settings are read from environment variables (or a local .env file) so a
deployment can tune the sales summary rules without code changes.
"""

from functools import lru_cache
from typing import Dict, List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from modules.analytics.constants import (
    DEFAULT_NET_SALES_RATE,
    DEFAULT_DISCOUNT_RATE,
    DEFAULT_TAX_RATE,
    DEFAULT_SERVICE_CHARGE_RATE,
    DEFAULT_NET_TOTAL_RATE,
    DEFAULT_VOID_RATE,
    DEFAULT_VOID_TRANSFER_RATE,
    DEFAULT_TOTAL_OUTLETS,
    DEFAULT_DAILY_AVERAGE_DIVISORS,
    DEFAULT_TOP_PRODUCTS_LIMIT,
    DEFAULT_LOW_STOCK_THRESHOLD,
)


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment Settings
    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # API
    app_name: str = "AuraConnect Sales Summary"
    cors_origins: str = "http://localhost:3000"

    # Reporting clock; empty means the host's local zone
    reporting_timezone: Optional[str] = None

    # Sales summary business rules (placeholder proportions of gross)
    analytics_net_sales_rate: float = Field(DEFAULT_NET_SALES_RATE, ge=0)
    analytics_discount_rate: float = Field(DEFAULT_DISCOUNT_RATE, ge=0)
    analytics_tax_rate: float = Field(DEFAULT_TAX_RATE, ge=0)
    analytics_service_charge_rate: float = Field(DEFAULT_SERVICE_CHARGE_RATE, ge=0)
    analytics_net_total_rate: float = Field(DEFAULT_NET_TOTAL_RATE, ge=0)
    analytics_void_rate: float = Field(DEFAULT_VOID_RATE, ge=0)
    analytics_void_transfer_rate: float = Field(DEFAULT_VOID_TRANSFER_RATE, ge=0)
    analytics_total_outlets: int = Field(DEFAULT_TOTAL_OUTLETS, ge=0)
    analytics_daily_average_divisors: Dict[str, int] = Field(
        default_factory=lambda: dict(DEFAULT_DAILY_AVERAGE_DIVISORS)
    )
    analytics_match_products_by_name: bool = True
    analytics_bound_yesterday_to_midnight: bool = False
    analytics_top_products_limit: int = Field(DEFAULT_TOP_PRODUCTS_LIMIT, ge=0)
    analytics_low_stock_threshold: int = Field(DEFAULT_LOW_STOCK_THRESHOLD, ge=0)

    @field_validator("reporting_timezone", mode="after")
    @classmethod
    def validate_reporting_timezone(cls, v):
        """Reject unknown IANA zone names at startup."""
        if not v:
            return None
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown reporting timezone: {v}")
        return v

    @field_validator("log_level", mode="after")
    @classmethod
    def validate_log_level(cls, v):
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v}")
        return level

    @property
    def cors_origin_list(self) -> List[str]:
        """Parse CORS origins from a comma separated string."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def reporting_tz(self) -> Optional[ZoneInfo]:
        if not self.reporting_timezone:
            return None
        return ZoneInfo(self.reporting_timezone)


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Returns:
        Settings instance with environment variables loaded
    """
    return Settings()

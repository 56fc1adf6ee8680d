"""
Centralized configuration with environment variable overrides.

The system timezone and booking window are configurable here. The slot
generator reads them from ``settings`` only when a caller does not pass
an explicit value.
"""

import logging
import os
from dataclasses import dataclass, field

import pytz
from dotenv import load_dotenv

from nexus_booking.logging_context import configure_logging

load_dotenv()

logger = logging.getLogger(__name__)


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


@dataclass(frozen=True)
class SchedulingConfig:
    """Timezone anchoring and booking window settings."""

    system_timezone: str = os.getenv("SYSTEM_TIMEZONE", "Asia/Ho_Chi_Minh")
    default_viewer_timezone: str = os.getenv("VIEWER_TIMEZONE", "")
    booking_window_days: int = _safe_int("BOOKING_WINDOW_DAYS", "14")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    scheduling: SchedulingConfig = field(default_factory=SchedulingConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    app_name: str = os.getenv("APP_NAME", "nexus-booking")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    if config.scheduling.system_timezone not in pytz.all_timezones_set:
        raise ValueError(
            f"SYSTEM_TIMEZONE must be a known timezone, got {config.scheduling.system_timezone!r}"
        )
    viewer = config.scheduling.default_viewer_timezone
    if viewer and viewer not in pytz.all_timezones_set:
        raise ValueError(f"VIEWER_TIMEZONE must be a known timezone, got {viewer!r}")
    if config.scheduling.booking_window_days < 1:
        raise ValueError(
            f"BOOKING_WINDOW_DAYS must be >= 1, got {config.scheduling.booking_window_days}"
        )


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    configure_logging(config.log_level)
    logger.info(
        "Configuration loaded for '%s' (system timezone %s)",
        config.app_name,
        config.scheduling.system_timezone,
    )
    return config


# Singleton instance
settings = load_config()

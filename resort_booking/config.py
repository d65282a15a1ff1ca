"""
Centralized configuration with environment variable overrides.

Resort details, the admin WhatsApp destination, dispatch wait windows and
the persistence endpoint are all configurable here. Nothing is hardcoded in
validation, composition or dispatch logic.
"""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from resort_booking.logging_context import make_log_handler
from resort_booking.utils import digits_only

load_dotenv()

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _safe_float(env_var: str, default: str) -> float:
    """Parse a float from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return float(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid float for {env_var}: {raw!r}"
        ) from None


def _safe_bool(env_var: str, default: str) -> bool:
    return os.getenv(env_var, default).strip().lower() in _TRUTHY


@dataclass(frozen=True)
class ResortConfig:
    """Resort identity and contact details."""

    name: str = os.getenv("RESORT_NAME", "OLU Ayurveda Beach Resort")
    admin_whatsapp: str = os.getenv("ADMIN_WHATSAPP_NUMBER", "+94 77 503 0038")
    contact_phone: str = os.getenv("RESORT_CONTACT_PHONE", "+94 77 209 6730")
    contact_email: str = os.getenv("RESORT_CONTACT_EMAIL", "info@oluayurvedabeach.lk")
    address: str = os.getenv(
        "RESORT_ADDRESS",
        "#810/15, Maradana Road, Thalaramba, Kaburugamuwa, Mirissa, Sri Lanka",
    )
    hours: str = os.getenv("RESORT_HOURS", "Daily 8:00 AM - 8:00 PM")


@dataclass(frozen=True)
class DispatchConfig:
    """Deep link endpoints and fallback wait windows."""

    app_uri: str = os.getenv("WHATSAPP_APP_URI", "whatsapp://send")
    web_url: str = os.getenv("WHATSAPP_WEB_URL", "https://wa.me")
    desktop_wait_ms: int = _safe_int("DESKTOP_FALLBACK_WAIT_MS", "500")
    mobile_wait_ms: int = _safe_int("MOBILE_FALLBACK_WAIT_MS", "1000")


@dataclass(frozen=True)
class BookingApiConfig:
    """Optional persistence endpoint settings."""

    base_url: str = os.getenv("BOOKING_API_URL", "http://localhost:5174")
    timeout_sec: float = _safe_float("BOOKING_API_TIMEOUT", "5.0")
    enabled: bool = _safe_bool("PERSIST_BOOKINGS", "false")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    resort: ResortConfig = field(default_factory=ResortConfig)
    dispatch: DispatchConfig = field(default_factory=DispatchConfig)
    api: BookingApiConfig = field(default_factory=BookingApiConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    app_name: str = os.getenv("APP_NAME", "resort-booking")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    admin_digits = digits_only(config.resort.admin_whatsapp)
    if not 8 <= len(admin_digits) <= 15:
        raise ValueError(
            "ADMIN_WHATSAPP_NUMBER must contain 8 to 15 digits, "
            f"got {config.resort.admin_whatsapp!r}"
        )
    if config.dispatch.desktop_wait_ms <= 0:
        raise ValueError(
            f"DESKTOP_FALLBACK_WAIT_MS must be > 0, got {config.dispatch.desktop_wait_ms}"
        )
    if config.dispatch.mobile_wait_ms <= 0:
        raise ValueError(
            f"MOBILE_FALLBACK_WAIT_MS must be > 0, got {config.dispatch.mobile_wait_ms}"
        )
    if not config.dispatch.web_url.startswith("https://"):
        raise ValueError(
            f"WHATSAPP_WEB_URL must be an https:// URL, got {config.dispatch.web_url!r}"
        )
    if config.api.timeout_sec <= 0:
        raise ValueError(
            f"BOOKING_API_TIMEOUT must be > 0, got {config.api.timeout_sec}"
        )


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        handlers=[make_log_handler()],
    )
    logger.info("Configuration loaded for '%s'", config.resort.name)
    return config


# Singleton instance
settings = load_config()

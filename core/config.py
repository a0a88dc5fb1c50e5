"""Runtime settings for the discovery and abstraction engine.

Values come from the process environment, with a local ``.env`` file
loaded first via python-dotenv so development setups need no exports.

Usage:
    from core.config import get_settings

    settings = get_settings()
    engine = SearchEngine(catalog, SearchConfig.from_settings(settings))
"""

import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if not value:
        return default
    return float(value)


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if not value:
        return default
    return int(value)


class Settings(BaseModel):
    """Environment-driven configuration.

    Attributes:
        search_min_confidence: Results scoring below this are dropped
        search_default_limit: Result count when the caller gives no limit
        log_level: Root logging level name
        log_json: Emit JSON log lines instead of human-readable ones
        callback_url: Callback URL handed to payment transforms
        expose_vendor: Include the selected vendor in HTTP responses
        skip_deprecated_vendors: Skip deprecated vendors when no preference is given
        gateway_url: Base URL of the tool gateway for HTTP dispatch
        gateway_timeout_seconds: Client-side timeout for gateway calls
    """
    search_min_confidence: float = Field(default=0.3, ge=0.0, le=1.0)
    search_default_limit: int = Field(default=3, ge=1)
    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=False)
    callback_url: Optional[str] = Field(default=None)
    expose_vendor: bool = Field(default=False)
    skip_deprecated_vendors: bool = Field(default=True)
    gateway_url: Optional[str] = Field(default=None)
    gateway_timeout_seconds: int = Field(default=30, ge=1)

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "Settings":
        """Build settings from ``OPS_*`` environment variables."""
        if load_env_file:
            load_dotenv()

        return cls(
            search_min_confidence=_env_float("OPS_SEARCH_MIN_CONFIDENCE", 0.3),
            search_default_limit=_env_int("OPS_SEARCH_DEFAULT_LIMIT", 3),
            log_level=os.getenv("OPS_LOG_LEVEL", "INFO").upper(),
            log_json=_env_bool("OPS_LOG_JSON", False),
            callback_url=os.getenv("OPS_CALLBACK_URL") or None,
            expose_vendor=_env_bool("OPS_EXPOSE_VENDOR", False),
            skip_deprecated_vendors=_env_bool("OPS_SKIP_DEPRECATED_VENDORS", True),
            gateway_url=os.getenv("OPS_GATEWAY_URL") or None,
            gateway_timeout_seconds=_env_int("OPS_GATEWAY_TIMEOUT_SECONDS", 30),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the process-wide settings, loading them on first use."""
    return Settings.from_env()

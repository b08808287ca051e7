"""
Centralized configuration for hubspot-summaries.

All configuration is loaded from environment variables (and a ``.env`` file
in the working directory, if present) with sensible defaults.

Usage:
    from hubspot_summaries.config import get_config
    cfg = get_config()
    print(cfg.hubspot.base_url)   # "https://api.hubapi.com"
    print(cfg.hubspot.missing())  # ["HUBSPOT_ACCESS_TOKEN"] when unset

Only entry points (CLI, MCP server) call ``get_config()``; everything below
them receives the config objects explicitly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import tzinfo
from zoneinfo import ZoneInfo

from dotenv import load_dotenv

from hubspot_summaries.errors import ConfigurationError


@dataclass(frozen=True)
class HubSpotConfig:
    """HubSpot engagements API parameters."""

    access_token: str = ""
    contact_id: str = ""  # every note is associated with this one contact
    base_url: str = "https://api.hubapi.com"
    timeout: float = 30.0
    page_size: int = 100

    def missing(self) -> list[str]:
        """Names of the required environment variables that are unset."""
        missing = []
        if not self.access_token:
            missing.append("HUBSPOT_ACCESS_TOKEN")
        if not self.contact_id:
            missing.append("SHARED_CONTACT_ID")
        return missing

    def require(self) -> None:
        """Raise ConfigurationError if any required setting is absent."""
        missing = self.missing()
        if missing:
            raise ConfigurationError(missing)


@dataclass(frozen=True)
class Config:
    """Top-level configuration."""

    hubspot: HubSpotConfig = field(default_factory=HubSpotConfig)

    # IANA zone for day-of-week and time-of-day filters; empty = server local
    timezone: str = ""
    log_level: str = "INFO"

    @property
    def tzinfo(self) -> tzinfo | None:
        return ZoneInfo(self.timezone) if self.timezone else None


# Singleton
_config: Config | None = None


def get_config() -> Config:
    """Get or create the singleton config from environment variables."""
    global _config
    if _config is not None:
        return _config
    _config = _load_from_env()
    return _config


def _load_from_env() -> Config:
    """Load configuration from environment variables."""
    load_dotenv()

    hubspot = HubSpotConfig(
        access_token=os.environ.get("HUBSPOT_ACCESS_TOKEN", ""),
        contact_id=os.environ.get("SHARED_CONTACT_ID", ""),
        base_url=os.environ.get("HUBSPOT_BASE_URL", "https://api.hubapi.com").rstrip("/"),
        timeout=float(os.environ.get("HUBSPOT_TIMEOUT", "30")),
        page_size=int(os.environ.get("HUBSPOT_PAGE_SIZE", "100")),
    )

    return Config(
        hubspot=hubspot,
        timezone=os.environ.get("SUMMARIES_TIMEZONE", ""),
        log_level=os.environ.get("SUMMARIES_LOG_LEVEL", "INFO").upper(),
    )


def reset_config() -> None:
    """Reset the singleton config (for testing)."""
    global _config
    _config = None

"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

from reelscout.infrastructure.http.fetcher import DEFAULT_USER_AGENT
from reelscout.infrastructure.resolution.signals import DEFAULT_DIRECT_LINK_SIGNALS

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "reelscout",
    "environment": "dev",
    "site": {
        "base_url": "https://www.filmyzilla13.com",
        "brand": "filmyzilla",
    },
    "http": {
        "timeout_seconds": 15.0,
        "max_redirects": 10,
        "user_agent": DEFAULT_USER_AGENT,
    },
    "resolver": {
        "timeout_seconds": 20.0,
        "warning_seconds": 8.0,
        "direct_link_signals": dict(DEFAULT_DIRECT_LINK_SIGNALS),
    },
    "home_feed": {
        "category_timeout_seconds": 5.0,
        "max_concurrent": 10,
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
}

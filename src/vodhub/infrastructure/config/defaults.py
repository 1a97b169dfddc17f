"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "vodhub",
    "environment": "dev",
    "http": {
        "follow_redirects": True,
    },
    "search": {
        "timeout_seconds": 8.0,
        "detail_timeout_seconds": 10.0,
        "max_pages": 5,
        "strict_pattern_sources": ["ffzy"],
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
    "cache": {
        "time_seconds": 7200,
    },
    "sites": [],
}

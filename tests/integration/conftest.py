"""Shared fixtures for integration tests.

These tests wire the real config loader, source provider, adapter and
use cases together, with upstream HTTP mocked via respx.
"""

from __future__ import annotations

from pathlib import Path

import pytest
import respx
import yaml

API_A = "https://api-a.test/api.php/provide/vod"
API_B = "https://api-b.test/api.php/provide/vod"
API_FFZY = "https://api-ffzy.test/api.php/provide/vod"
FFZY_DETAIL = "https://ffzy.test"

SITES = [
    {"key": "alpha", "name": "Alpha", "api": API_A},
    {"key": "beta", "name": "Beta", "api": API_B},
    {"key": "ffzy", "name": "FFZY", "api": API_FFZY, "detail": FFZY_DETAIL},
]


@pytest.fixture()
def yaml_config(tmp_path: Path) -> Path:
    """Write a complete YAML config (three sites) and return its path."""
    config = {
        "app_name": "vodhub-test",
        "environment": "test",
        "http": {"user_agent": "TestAgent/1.0"},
        "search": {
            "timeout_seconds": 3.0,
            "detail_timeout_seconds": 4.0,
            "max_pages": 3,
        },
        "logging": {"level": "DEBUG", "format": "console"},
        "cache": {"time_seconds": 1800},
        "sites": SITES,
    }
    path = tmp_path / "config.yaml"
    path.write_text(yaml.dump(config, allow_unicode=True), encoding="utf-8")
    return path


@pytest.fixture()
def respx_mock() -> respx.MockRouter:
    """Explicit respx mock router for request interception."""
    with respx.mock(assert_all_called=False) as router:
        yield router

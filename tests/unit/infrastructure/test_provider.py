"""Tests for ConfigSourceProvider."""

from __future__ import annotations

import pytest

from vodhub.domain.entities import SourceNotFoundError
from vodhub.infrastructure.config import AppConfig
from vodhub.infrastructure.sources import ConfigSourceProvider


def _config(**overrides) -> AppConfig:
    data = {
        "sites": [
            {"key": "alpha", "name": "Alpha", "api": "https://a.test/api"},
            {
                "key": "ffzy",
                "name": "FFZY",
                "api": "https://f.test/api",
                "detail": "https://f.test",
            },
            {"key": "beta", "name": "Beta", "api": "https://b.test/api", "detail": ""},
        ],
    }
    data.update(overrides)
    return AppConfig.model_validate(data)


class TestConfigSourceProvider:
    def test_order_follows_config(self) -> None:
        provider = ConfigSourceProvider(_config())
        assert [s.key for s in provider.list_sources()] == ["alpha", "ffzy", "beta"]

    def test_detail_routing_flags(self) -> None:
        provider = ConfigSourceProvider(_config())
        assert not provider.get("alpha").uses_html_detail
        assert provider.get("ffzy").uses_html_detail
        assert provider.get("beta").detail is None

    def test_descriptors_carry_configured_user_agent(self) -> None:
        provider = ConfigSourceProvider(_config(http_user_agent="vodhub-test/1.0"))
        headers = provider.get("alpha").headers
        assert headers["User-Agent"] == "vodhub-test/1.0"
        assert headers["Accept"] == "application/json"

    def test_headers_are_read_only(self) -> None:
        provider = ConfigSourceProvider(_config())
        with pytest.raises(TypeError):
            provider.get("alpha").headers["X-Extra"] = "1"  # type: ignore[index]

    def test_list_is_a_copy(self) -> None:
        provider = ConfigSourceProvider(_config())
        provider.list_sources().clear()
        assert len(provider.list_sources()) == 3

    def test_unknown_key(self) -> None:
        provider = ConfigSourceProvider(_config())
        with pytest.raises(SourceNotFoundError, match="unknown source: nope"):
            provider.get("nope")

    def test_cache_time(self) -> None:
        assert ConfigSourceProvider(_config()).cache_time() == 7200
        assert (
            ConfigSourceProvider(_config(cache_time_seconds=60)).cache_time() == 60
        )

    def test_no_sites(self) -> None:
        provider = ConfigSourceProvider(AppConfig())
        assert provider.list_sources() == []

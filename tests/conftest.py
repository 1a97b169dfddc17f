"""Shared test fixtures for vodhub test suite."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from vodhub.domain.entities import SourceDescriptor, SourceNotFoundError

API_A = "https://api-a.test/api.php/provide/vod"
API_B = "https://api-b.test/api.php/provide/vod"
DETAIL_BASE = "https://ffzy.test"

# ---------------------------------------------------------------------------
# Domain entity fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def source_a() -> SourceDescriptor:
    """JSON-only source."""
    return SourceDescriptor(key="alpha", name="Alpha", api=API_A)


@pytest.fixture()
def source_b() -> SourceDescriptor:
    return SourceDescriptor(key="beta", name="Beta", api=API_B)


@pytest.fixture()
def html_source() -> SourceDescriptor:
    """Source whose detail lookups go through the HTML detail page."""
    return SourceDescriptor(
        key="ffzy", name="FFZY", api="https://api-ffzy.test/vod", detail=DETAIL_BASE
    )


# ---------------------------------------------------------------------------
# Mock port fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_provider(source_a: SourceDescriptor, source_b: SourceDescriptor) -> MagicMock:
    """Mock SourceProviderPort with two JSON sources."""
    sources = {s.key: s for s in (source_a, source_b)}

    def _get(key: str) -> SourceDescriptor:
        if key not in sources:
            raise SourceNotFoundError(key)
        return sources[key]

    provider = MagicMock()
    provider.list_sources.return_value = [source_a, source_b]
    provider.get.side_effect = _get
    provider.cache_time.return_value = 7200
    return provider


@pytest.fixture()
def mock_adapter() -> AsyncMock:
    """Mock SourceAdapterPort returning nothing."""
    adapter = AsyncMock()
    adapter.search_one = AsyncMock(return_value=[])
    adapter.get_detail = AsyncMock()
    return adapter


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------


@pytest.fixture()
async def http_client() -> httpx.AsyncClient:
    """Real httpx.AsyncClient for use with respx mocking."""
    async with httpx.AsyncClient() as client:
        yield client


"""Composition root: builds the HTTP client, adapters and use cases."""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator

import httpx
import structlog

from vodhub.application.use_cases import AggregatedSearchUseCase, VideoDetailUseCase
from vodhub.infrastructure.config.schema import AppConfig
from vodhub.infrastructure.sources import CmsSourceAdapter, ConfigSourceProvider

log = structlog.get_logger(__name__)


@dataclass
class Services:
    """Wired use cases plus the resources they share."""

    config: AppConfig
    http_client: httpx.AsyncClient
    provider: ConfigSourceProvider
    adapter: CmsSourceAdapter
    search: AggregatedSearchUseCase
    detail: VideoDetailUseCase


@asynccontextmanager
async def build_services(
    config: AppConfig,
    *,
    http_client: httpx.AsyncClient | None = None,
) -> AsyncIterator[Services]:
    """Create all services; closes the HTTP client on exit if it was created here."""
    owns_client = http_client is None
    if http_client is None:
        http_client = httpx.AsyncClient(
            follow_redirects=config.http_follow_redirects,
            headers={"User-Agent": config.http_user_agent},
        )

    provider = ConfigSourceProvider(config)
    adapter = CmsSourceAdapter(
        http_client=http_client,
        max_search_pages=config.max_search_pages,
        search_timeout=config.search_timeout_seconds,
        detail_timeout=config.detail_timeout_seconds,
        strict_sources=config.strict_pattern_sources,
    )

    log.info(
        "services_initialized",
        sources=[s.key for s in provider.list_sources()],
        max_search_pages=config.max_search_pages,
        search_timeout=config.search_timeout_seconds,
        detail_timeout=config.detail_timeout_seconds,
    )

    try:
        yield Services(
            config=config,
            http_client=http_client,
            provider=provider,
            adapter=adapter,
            search=AggregatedSearchUseCase(provider, adapter),
            detail=VideoDetailUseCase(provider, adapter),
        )
    finally:
        if owns_client:
            await http_client.aclose()
        log.info("services_closed")

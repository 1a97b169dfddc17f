"""Aggregated multi-source search with staged query relaxation.

query -> parallel per-source search -> flatten (source order)
-> if empty: first-segment query -> if still empty: digitless query.
"""

from __future__ import annotations

import asyncio

import structlog

from vodhub.application.query_relaxation import relaxed_queries
from vodhub.domain.entities.video import (
    SearchResponse,
    SearchResultItem,
    SourceDescriptor,
)
from vodhub.domain.ports import SourceAdapterPort, SourceProviderPort

log = structlog.get_logger(__name__)

SEARCH_FAILED = "search failed"


class AggregatedSearchUseCase:
    """Fans a query out to every configured source and merges the results.

    Each fallback stage is a full, independent fan-out; there are no
    per-source retries.  Result order is source configuration order,
    then each source's own page/item order.
    """

    def __init__(
        self,
        provider: SourceProviderPort,
        adapter: SourceAdapterPort,
    ) -> None:
        self._provider = provider
        self._adapter = adapter

    async def execute(self, query: str | None) -> SearchResponse:
        """Search all configured sources. Never raises."""
        try:
            descriptors = self._provider.list_sources()
            results = await self.search(query or "", descriptors)
        except Exception:
            log.error("aggregated_search_failed", query=query, exc_info=True)
            return SearchResponse(results=[], error=SEARCH_FAILED)
        return SearchResponse(results=results)

    async def search(
        self, query: str, descriptors: list[SourceDescriptor]
    ) -> list[SearchResultItem]:
        """Exact search, then the relaxed queries until one yields results."""
        results = await self.search_all(query, descriptors)
        if results or not query.strip():
            return results

        for stage, relaxed in enumerate(relaxed_queries(query), start=1):
            log.info(
                "search_fallback_stage",
                stage=stage,
                original_query=query,
                query=relaxed,
            )
            results = await self.search_all(relaxed, descriptors)
            if results:
                break
        return results

    async def search_all(
        self, query: str, descriptors: list[SourceDescriptor]
    ) -> list[SearchResultItem]:
        """One fan-out over *descriptors*, flattened in descriptor order."""
        if not query or not query.strip():
            return []

        per_source = await asyncio.gather(
            *(self._search_source(d, query) for d in descriptors)
        )

        merged: list[SearchResultItem] = []
        for results in per_source:
            merged.extend(results)

        log.info(
            "search_fanout_done",
            query=query,
            sources=len(descriptors),
            result_count=len(merged),
        )
        return merged

    async def _search_source(
        self, descriptor: SourceDescriptor, query: str
    ) -> list[SearchResultItem]:
        try:
            return await self._adapter.search_one(descriptor, query)
        except Exception:
            # Adapters are expected to swallow their own errors; contain any leak.
            log.warning(
                "source_adapter_raised",
                source=descriptor.key,
                query=query,
                exc_info=True,
            )
            return []

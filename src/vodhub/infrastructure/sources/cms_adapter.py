"""httpx adapter for CMS-style "videolist" content APIs.

One adapter instance serves every configured source; the per-source
differences (base URL, endpoint templates, headers, optional HTML detail
site) live on the ``SourceDescriptor`` passed to each call.

Search is soft-failing: any transport error, non-2xx status, bad JSON
or malformed envelope yields an empty contribution.  Detail lookups
raise, since a single item lookup has nothing to fall back to.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Iterable
from typing import Any
from urllib.parse import quote

import httpx
import structlog

from vodhub.domain.entities.video import (
    ContentInvalidError,
    DetailFetchError,
    SearchResultItem,
    SourceDescriptor,
    VideoDetail,
    VideoInfo,
)
from vodhub.infrastructure.common.stream_links import (
    STRICT_PATTERN_SOURCES,
    extract_episodes_from_blob,
    extract_episodes_from_content,
    extract_episodes_from_detail_field,
)
from vodhub.infrastructure.common.text import (
    collapse_whitespace,
    extract_year,
    strip_markup,
)

from .detail_page import detail_page_url, parse_detail_page
from .envelope import RawVodItem, parse_envelope, parse_item
from .pagination import additional_page_count, gather_pages

log = structlog.get_logger(__name__)

DEFAULT_SEARCH_TIMEOUT = 8.0
DEFAULT_DETAIL_TIMEOUT = 10.0
DEFAULT_MAX_SEARCH_PAGES = 5

HTML_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"


def _encode(query: str) -> str:
    return quote(query, safe="")


def build_search_url(descriptor: SourceDescriptor, query: str) -> str:
    return descriptor.api + descriptor.search_path + _encode(query)


def build_page_url(descriptor: SourceDescriptor, query: str, page: int) -> str:
    path = descriptor.page_path.replace("{query}", _encode(query)).replace(
        "{page}", str(page)
    )
    return descriptor.api + path


def build_detail_url(descriptor: SourceDescriptor, video_id: str) -> str:
    return f"{descriptor.api}{descriptor.detail_path}{video_id}"


def map_search_item(item: RawVodItem, descriptor: SourceDescriptor) -> SearchResultItem:
    return SearchResultItem(
        id=item.vod_id,
        title=collapse_whitespace(item.vod_name),
        poster=item.vod_pic,
        episodes=extract_episodes_from_blob(item.vod_play_url),
        source=descriptor.key,
        source_name=descriptor.name,
        category=item.vod_class,
        year=extract_year(item.vod_year),
        desc=strip_markup(item.vod_content),
        type_name=item.type_name,
        douban_id=item.vod_douban_id,
    )


class CmsSourceAdapter:
    """Search and detail lookups against CMS "videolist" APIs.

    Args:
        http_client: Shared ``httpx.AsyncClient`` (connection pool only).
        max_search_pages: Cap on pages fetched per source, page 1 included.
        search_timeout: Per-request timeout for search/page fetches.
        detail_timeout: Per-request timeout for detail fetches.
        strict_sources: Source keys using the dated hex-path HTML rule.
    """

    def __init__(
        self,
        *,
        http_client: httpx.AsyncClient,
        max_search_pages: int = DEFAULT_MAX_SEARCH_PAGES,
        search_timeout: float = DEFAULT_SEARCH_TIMEOUT,
        detail_timeout: float = DEFAULT_DETAIL_TIMEOUT,
        strict_sources: Iterable[str] = STRICT_PATTERN_SOURCES,
    ) -> None:
        if max_search_pages < 1:
            raise ValueError("max_search_pages must be >= 1")
        self._http = http_client
        self._max_pages = max_search_pages
        self._search_timeout = search_timeout
        self._detail_timeout = detail_timeout
        self._strict_sources = frozenset(strict_sources)

    async def _get(
        self, url: str, *, headers: dict[str, str], timeout: float
    ) -> httpx.Response:
        """GET *url*; *timeout* bounds the whole exchange, body read included.

        httpx itself applies ``timeout=`` per phase (connect, read, ...).
        """
        return await asyncio.wait_for(
            self._http.get(url, headers=headers, timeout=timeout),
            timeout=timeout,
        )

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    async def _safe_fetch_json(
        self,
        descriptor: SourceDescriptor,
        url: str,
        *,
        context: str,
    ) -> Any | None:
        """GET *url* and decode JSON; ``None`` on any failure (logged)."""
        try:
            resp = await self._get(
                url,
                headers=dict(descriptor.headers),
                timeout=self._search_timeout,
            )
            resp.raise_for_status()
        except (httpx.TimeoutException, asyncio.TimeoutError):
            log.warning(
                "source_timeout", source=descriptor.key, url=url, context=context
            )
            return None
        except httpx.HTTPStatusError as exc:
            log.warning(
                "source_http_error",
                source=descriptor.key,
                url=url,
                status=exc.response.status_code,
                context=context,
            )
            return None
        except httpx.HTTPError as exc:
            log.warning(
                "source_fetch_error",
                source=descriptor.key,
                url=url,
                error=str(exc),
                context=context,
            )
            return None

        try:
            return resp.json()
        except (json.JSONDecodeError, UnicodeDecodeError, ValueError):
            log.warning(
                "source_invalid_json", source=descriptor.key, url=url, context=context
            )
            return None

    def _map_items(
        self, descriptor: SourceDescriptor, raw_items: list[dict[str, Any]]
    ) -> list[SearchResultItem]:
        results: list[SearchResultItem] = []
        for raw in raw_items:
            item = parse_item(raw)
            if item is None:
                log.debug(
                    "source_item_skipped",
                    source=descriptor.key,
                    vod_id=raw.get("vod_id"),
                )
                continue
            results.append(map_search_item(item, descriptor))
        return results

    async def _fetch_page(
        self, descriptor: SourceDescriptor, query: str, page: int
    ) -> list[SearchResultItem]:
        url = build_page_url(descriptor, query, page)
        data = await self._safe_fetch_json(descriptor, url, context=f"page:{page}")
        envelope = parse_envelope(data)
        if envelope is None:
            return []
        return self._map_items(descriptor, envelope.items)

    async def search_one(
        self, descriptor: SourceDescriptor, query: str
    ) -> list[SearchResultItem]:
        """Search one source, following pagination up to the configured cap.

        Never raises; failures yield ``[]`` for the affected request only.
        """
        try:
            return await self._search_one(descriptor, query)
        except Exception:
            log.warning(
                "source_search_failed",
                source=descriptor.key,
                query=query,
                exc_info=True,
            )
            return []

    async def _search_one(
        self, descriptor: SourceDescriptor, query: str
    ) -> list[SearchResultItem]:
        url = build_search_url(descriptor, query)
        data = await self._safe_fetch_json(descriptor, url, context="search")
        envelope = parse_envelope(data)
        if envelope is None:
            if data is not None:
                log.warning("source_malformed_envelope", source=descriptor.key, url=url)
            return []
        if not envelope.items:
            return []

        results = self._map_items(descriptor, envelope.items)

        extra = additional_page_count(envelope.pagecount, self._max_pages)
        if extra > 0:
            results.extend(
                await gather_pages(
                    lambda page: self._fetch_page(descriptor, query, page),
                    range(2, extra + 2),
                )
            )

        log.debug(
            "source_search_done",
            source=descriptor.key,
            query=query,
            pagecount=envelope.pagecount,
            pages_fetched=extra + 1,
            result_count=len(results),
        )
        return results

    # ------------------------------------------------------------------
    # Detail
    # ------------------------------------------------------------------

    async def _fetch_detail(
        self,
        descriptor: SourceDescriptor,
        url: str,
        *,
        accept: str | None = None,
    ) -> httpx.Response:
        headers = dict(descriptor.headers)
        if accept:
            headers["Accept"] = accept
        try:
            resp = await self._get(
                url,
                headers=headers,
                timeout=self._detail_timeout,
            )
        except (httpx.TimeoutException, asyncio.TimeoutError) as exc:
            raise DetailFetchError(f"detail request timed out: {url}") from exc
        except httpx.HTTPError as exc:
            raise DetailFetchError(f"detail request failed: {exc}") from exc

        if not resp.is_success:
            raise DetailFetchError(
                f"detail request failed: {resp.status_code}",
                status=resp.status_code,
            )
        return resp

    async def get_detail(
        self, descriptor: SourceDescriptor, video_id: str
    ) -> VideoDetail:
        """Fetch full detail for *video_id*.

        Sources with a detail-page base URL are scraped from HTML; all
        others use the JSON API.

        Raises:
            DetailFetchError: Transport failure or non-2xx status.
            ContentInvalidError: JSON envelope without a usable record.
        """
        if descriptor.detail:
            return await self._get_html_detail(descriptor, descriptor.detail, video_id)
        return await self._get_json_detail(descriptor, video_id)

    async def _get_json_detail(
        self, descriptor: SourceDescriptor, video_id: str
    ) -> VideoDetail:
        url = build_detail_url(descriptor, video_id)
        resp = await self._fetch_detail(descriptor, url)

        try:
            data = resp.json()
        except (json.JSONDecodeError, UnicodeDecodeError, ValueError) as exc:
            raise ContentInvalidError("detail response is not valid JSON") from exc

        envelope = parse_envelope(data)
        if envelope is None or not envelope.items:
            raise ContentInvalidError("detail response has no records")

        # Upstreams return at most one record per id; take the first.
        item = parse_item(envelope.items[0])
        if item is None:
            raise ContentInvalidError("detail record is malformed")

        episodes = extract_episodes_from_detail_field(item.vod_play_url)
        if not episodes:
            episodes = extract_episodes_from_content(item.vod_content)

        log.info(
            "detail_fetched",
            source=descriptor.key,
            id=video_id,
            mode="json",
            episode_count=len(episodes),
        )
        return VideoDetail(
            code=200,
            episodes=episodes,
            detail_url=url,
            video_info=VideoInfo(
                id=video_id,
                source=descriptor.key,
                source_name=descriptor.name,
                title=item.vod_name,
                cover=item.vod_pic,
                desc=strip_markup(item.vod_content),
                type=item.type_name,
                year=extract_year(item.vod_year),
                area=item.vod_area,
                director=item.vod_director,
                actor=item.vod_actor,
                remarks=item.vod_remarks,
            ),
        )

    async def _get_html_detail(
        self, descriptor: SourceDescriptor, detail_base: str, video_id: str
    ) -> VideoDetail:
        url = detail_page_url(detail_base, video_id)
        resp = await self._fetch_detail(descriptor, url, accept=HTML_ACCEPT)

        page = parse_detail_page(resp.text, descriptor.key, self._strict_sources)

        log.info(
            "detail_fetched",
            source=descriptor.key,
            id=video_id,
            mode="html",
            episode_count=len(page.episodes),
        )
        return VideoDetail(
            code=200,
            episodes=page.episodes,
            detail_url=url,
            video_info=VideoInfo(
                id=video_id,
                source=descriptor.key,
                source_name=descriptor.name,
                title=page.title,
                cover=page.cover,
                desc=page.desc,
            ),
        )

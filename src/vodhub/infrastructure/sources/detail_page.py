"""Scraping rules for CMS HTML detail pages (``/index.php/vod/detail/id/<id>.html``)."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from vodhub.infrastructure.common.html_selectors import (
    extract_text,
    find_image_url,
    parse_html,
)
from vodhub.infrastructure.common.stream_links import (
    STRICT_PATTERN_SOURCES,
    extract_episodes_from_html,
)
from vodhub.infrastructure.common.text import collapse_whitespace

TITLE_SELECTORS: tuple[str, ...] = ("h1",)
SKETCH_SELECTORS: tuple[str, ...] = ("div.sketch", ".sketch")

DETAIL_PAGE_PATH = "/index.php/vod/detail/id/{id}.html"


@dataclass
class DetailPage:
    title: str = ""
    desc: str = ""
    cover: str = ""
    episodes: list[str] = field(default_factory=list)


def detail_page_url(detail_base: str, video_id: str) -> str:
    return detail_base.rstrip("/") + DETAIL_PAGE_PATH.format(id=video_id)


def parse_detail_page(
    html: str,
    source_key: str,
    strict_sources: Iterable[str] = STRICT_PATTERN_SOURCES,
) -> DetailPage:
    """Pull title, description, cover and stream links out of a detail page.

    Missing pieces degrade to empty values; this never raises on odd markup.
    """
    if not html:
        return DetailPage()

    soup = parse_html(html)
    return DetailPage(
        title=collapse_whitespace(
            extract_text(soup, *TITLE_SELECTORS, separator=" ")
        ),
        desc=collapse_whitespace(extract_text(soup, *SKETCH_SELECTORS, separator=" ")),
        cover=find_image_url(html),
        episodes=extract_episodes_from_html(html, source_key, strict_sources),
    )

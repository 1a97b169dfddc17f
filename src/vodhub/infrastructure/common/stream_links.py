"""Stream URL extraction from delimiter-encoded play fields and HTML.

Upstream CMS APIs encode playback links as::

    <group>$$$<group>$$$...

where every group is a ``#``-separated list of ``<name>$<url>`` entries
(or bare URL tokens).  HTML detail pages embed the same ``$<url>``
tokens inside inline scripts.  Each regex below is a standalone rule so
it can be tested in isolation.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from urllib.parse import urlparse

PLAY_SOURCE_DELIMITER = "$$$"
EPISODE_DELIMITER = "#"
ENTRY_MARKER = "$"

# Sources whose detail pages need the dated hex-path rule first.
STRICT_PATTERN_SOURCES: frozenset[str] = frozenset({"ffzy"})

# Any http(s) URL ending in .m3u8.
M3U8_URL_RE = re.compile(r"https?://[^\"'\s]+?\.m3u8")

# Same as above but with an optional leading ``$`` marker kept in the match.
OPTIONAL_MARKED_M3U8_RE = re.compile(r"\$?https?://[^\"'\s]+?\.m3u8")

# ``$``-marked URL, as embedded in detail page scripts.
MARKED_M3U8_RE = re.compile(r"\$https?://[^\"'\s]+?\.m3u8")

# ``$``-marked URL with a dated path segment and ``<n>_<hex>/index.m3u8``.
DATED_HEX_M3U8_RE = re.compile(
    r"\$https?://[^\"'\s]+?/\d{8}/\d+_[a-f0-9]+/index\.m3u8"
)


def _dedupe(links: Iterable[str]) -> list[str]:
    """Drop duplicates, keeping first-seen order."""
    return list(dict.fromkeys(links))


def clean_link(link: str) -> str:
    """Strip the leading ``$`` marker and any ``(label)`` suffix."""
    if link.startswith(ENTRY_MARKER):
        link = link[1:]
    paren = link.find("(")
    return link[:paren] if paren > 0 else link


def _clean_all(raw_links: Iterable[str]) -> list[str]:
    # Dedupe the raw tokens first, then again in case trimming collapsed two.
    return _dedupe(clean_link(link) for link in _dedupe(raw_links))


def extract_episodes_from_blob(play_url: str | None) -> list[str]:
    """Pick the play-source group with the most m3u8 links.

    Ties keep the earliest group.  Returns cleaned, deduplicated links.
    """
    if not play_url or not isinstance(play_url, str):
        return []

    best: list[str] = []
    for group in play_url.split(PLAY_SOURCE_DELIMITER):
        matches = [
            m
            for entry in group.split(EPISODE_DELIMITER)
            for m in OPTIONAL_MARKED_M3U8_RE.findall(entry)
        ]
        if len(matches) > len(best):
            best = matches

    return _clean_all(best)


def extract_episodes_from_html(
    html: str | None,
    source_key: str,
    strict_sources: Iterable[str] = STRICT_PATTERN_SOURCES,
) -> list[str]:
    """Scan a detail page for ``$``-marked m3u8 links.

    Strict sources try the dated hex-path rule first and only fall back
    to the broad rule when it finds nothing.
    """
    if not html or not isinstance(html, str):
        return []

    matches: list[str] = []
    if source_key in set(strict_sources):
        matches = DATED_HEX_M3U8_RE.findall(html)
    if not matches:
        matches = MARKED_M3U8_RE.findall(html)

    return _clean_all(matches)


def extract_episodes_from_content(text: str | None) -> list[str]:
    """Last-resort scan of free text for m3u8 links (no deduplication)."""
    if not text or not isinstance(text, str):
        return []
    return [m.removeprefix(ENTRY_MARKER) for m in M3U8_URL_RE.findall(text)]


def is_absolute_http_url(value: str) -> bool:
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def extract_episodes_from_detail_field(play_url: str | None) -> list[str]:
    """Parse the first play-source group of a JSON detail record.

    Each ``#``-separated entry contributes the text after its ``$``
    marker (or the whole entry when it has none), provided that text is
    an absolute http(s) URL.
    """
    if not play_url or not isinstance(play_url, str):
        return []

    main_group = play_url.split(PLAY_SOURCE_DELIMITER)[0]
    links: list[str] = []
    for entry in main_group.split(EPISODE_DELIMITER):
        parts = entry.split(ENTRY_MARKER)
        candidate = (parts[1] if len(parts) > 1 else parts[0]).strip()
        if candidate and is_absolute_http_url(candidate):
            links.append(candidate)
    return _dedupe(links)

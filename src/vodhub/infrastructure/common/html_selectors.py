"""CSS-selector-based HTML extraction with fallback chains.

``extract_text`` accepts a primary selector plus optional
*fallback_selectors*; the first selector that yields usable text wins.
Detail pages of different CMS themes wrap the same data in slightly
different markup.
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup, Tag

# First image-looking URL anywhere in a page (used for covers).
IMAGE_URL_RE = re.compile(
    r"https?://[^\"'\s()<>]+?\.(?:jpe?g|png|webp)", re.IGNORECASE
)


def parse_html(html: str) -> BeautifulSoup:
    """Parse an HTML string into a BeautifulSoup tree (``lxml`` parser)."""
    return BeautifulSoup(html, "lxml")


def extract_text(
    root: BeautifulSoup | Tag,
    selector: str,
    *fallback_selectors: str,
    default: str = "",
    separator: str = "",
) -> str:
    """Extract stripped text from the first matching element."""
    for sel in (selector, *fallback_selectors):
        match = root.select_one(sel)
        if match:
            text = match.get_text(separator, strip=True)
            if text:
                return text
    return default


def find_image_url(html: str) -> str:
    m = IMAGE_URL_RE.search(html)
    return m.group(0).strip() if m else ""

"""Text normalization helpers for upstream descriptive fields."""

from __future__ import annotations

import re
from html import unescape

_TAG_RE = re.compile(r"<[^>]+>")
_WS_RE = re.compile(r"\s+")
# First four consecutive digits ("20230105" -> "2023").
_YEAR_RE = re.compile(r"\d{4}")


def collapse_whitespace(text: str | None) -> str:
    """Trim *text* and collapse internal whitespace runs to one space."""
    if not text:
        return ""
    return _WS_RE.sub(" ", text).strip()


def strip_markup(text: str | None) -> str:
    """Remove HTML tags and entities, returning plain single-spaced text.

    >>> strip_markup("<p>Hello&nbsp;<b>world</b></p>")
    'Hello world'
    """
    if not text:
        return ""
    plain = _TAG_RE.sub(" ", text)
    return collapse_whitespace(unescape(plain))


def extract_year(raw: str | int | None) -> str:
    """Return the first four consecutive digits in *raw*, or ``""``."""
    if raw is None:
        return ""
    m = _YEAR_RE.search(str(raw))
    return m.group(0) if m else ""

"""Common infrastructure utilities."""

from __future__ import annotations

from .converters import to_int
from .stream_links import (
    extract_episodes_from_blob,
    extract_episodes_from_content,
    extract_episodes_from_detail_field,
    extract_episodes_from_html,
)
from .text import collapse_whitespace, extract_year, strip_markup

__all__ = [
    "collapse_whitespace",
    "extract_episodes_from_blob",
    "extract_episodes_from_content",
    "extract_episodes_from_detail_field",
    "extract_episodes_from_html",
    "extract_year",
    "strip_markup",
    "to_int",
]

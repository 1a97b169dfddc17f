"""Upstream content API adapters."""

from __future__ import annotations

from .cms_adapter import CmsSourceAdapter
from .provider import ConfigSourceProvider

__all__ = ["CmsSourceAdapter", "ConfigSourceProvider"]

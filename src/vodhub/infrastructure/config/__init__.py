from __future__ import annotations

from .load import load_config
from .schema import AppConfig, EnvOverrides, SiteConfig

__all__ = ["AppConfig", "EnvOverrides", "SiteConfig", "load_config"]

"""Source descriptors backed by the validated application config."""

from __future__ import annotations

from types import MappingProxyType

from vodhub.domain.entities.video import (
    DEFAULT_HEADERS,
    SourceDescriptor,
    SourceNotFoundError,
)
from vodhub.infrastructure.config.schema import AppConfig


class ConfigSourceProvider:
    """Builds one immutable ``SourceDescriptor`` per configured site.

    Descriptor order follows the ``sites`` list, which is also the
    outer ordering of merged search results.
    """

    def __init__(self, config: AppConfig) -> None:
        headers = MappingProxyType(
            {**DEFAULT_HEADERS, "User-Agent": config.http_user_agent}
        )
        self._sources: tuple[SourceDescriptor, ...] = tuple(
            SourceDescriptor(
                key=site.key,
                name=site.name,
                api=site.api,
                detail=site.detail,
                headers=headers,
            )
            for site in config.sites
        )
        self._by_key = {s.key: s for s in self._sources}
        self._cache_time = config.cache_time_seconds

    def list_sources(self) -> list[SourceDescriptor]:
        return list(self._sources)

    def get(self, key: str) -> SourceDescriptor:
        try:
            return self._by_key[key]
        except KeyError:
            raise SourceNotFoundError(f"unknown source: {key}") from None

    def cache_time(self) -> int:
        return self._cache_time

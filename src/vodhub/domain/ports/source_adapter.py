"""Port for per-source search and detail lookups."""

from __future__ import annotations

from typing import Protocol

from vodhub.domain.entities.video import SearchResultItem, SourceDescriptor, VideoDetail


class SourceAdapterPort(Protocol):
    """Async interface to one family of upstream content APIs.

    ``search_one`` must never raise: failures degrade to an empty list.
    ``get_detail`` raises ``DetailFetchError`` / ``ContentInvalidError``.
    """

    async def search_one(
        self, descriptor: SourceDescriptor, query: str
    ) -> list[SearchResultItem]: ...

    async def get_detail(
        self, descriptor: SourceDescriptor, video_id: str
    ) -> VideoDetail: ...

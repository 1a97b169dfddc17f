"""Single-item detail lookup."""

from __future__ import annotations

import structlog

from vodhub.domain.entities.video import VideoDetail
from vodhub.domain.ports import SourceAdapterPort, SourceProviderPort

log = structlog.get_logger(__name__)


class VideoDetailUseCase:
    """Resolves a source key to its descriptor and fetches one item's detail.

    Unlike search, failures propagate: there is no other source to fall
    back to for a specific ``(source, id)`` pair.
    """

    def __init__(
        self,
        provider: SourceProviderPort,
        adapter: SourceAdapterPort,
    ) -> None:
        self._provider = provider
        self._adapter = adapter

    async def execute(self, source_key: str, video_id: str) -> VideoDetail:
        """Fetch detail for *video_id* on *source_key*.

        Raises:
            SourceNotFoundError: Unknown source key.
            DetailFetchError: Upstream transport failure or non-2xx status.
            ContentInvalidError: Upstream returned no usable record.
        """
        descriptor = self._provider.get(source_key)
        try:
            return await self._adapter.get_detail(descriptor, video_id)
        except Exception:
            log.warning(
                "video_detail_failed", source=source_key, id=video_id, exc_info=True
            )
            raise

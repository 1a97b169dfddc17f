"""Port for the configured list of upstream sources."""

from __future__ import annotations

from typing import Protocol

from vodhub.domain.entities.video import SourceDescriptor


class SourceProviderPort(Protocol):
    """Supplies the ordered, immutable source descriptors."""

    def list_sources(self) -> list[SourceDescriptor]: ...

    def get(self, key: str) -> SourceDescriptor:
        """Return the descriptor for *key*.

        Raises:
            SourceNotFoundError: If no source is configured under *key*.
        """
        ...

    def cache_time(self) -> int:
        """Response cache duration in seconds (serving layer only)."""
        ...

"""Domain models for aggregated video search and detail lookup."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

DEFAULT_HEADERS: Mapping[str, str] = MappingProxyType(
    {
        "User-Agent": (
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
            "AppleWebKit/537.36 (KHTML, like Gecko) "
            "Chrome/131.0.0.0 Safari/537.36"
        ),
        "Accept": "application/json",
    }
)


@dataclass(frozen=True)
class SourceDescriptor:
    """Static description of one upstream content API."""

    key: str
    name: str
    api: str
    detail: str | None = None

    search_path: str = "?ac=videolist&wd="
    page_path: str = "?ac=videolist&wd={query}&pg={page}"
    detail_path: str = "?ac=videolist&ids="

    headers: Mapping[str, str] = field(
        default_factory=lambda: DEFAULT_HEADERS, compare=False
    )

    @property
    def uses_html_detail(self) -> bool:
        """Detail lookups go through HTML scraping instead of the JSON API."""
        return bool(self.detail)


@dataclass
class SearchResultItem:
    """Normalized search hit produced by one source adapter."""

    id: str
    title: str
    poster: str
    episodes: list[str]
    source: str
    source_name: str

    category: str | None = None
    year: str = ""
    desc: str = ""
    type_name: str | None = None
    douban_id: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "poster": self.poster,
            "episodes": list(self.episodes),
            "source": self.source,
            "source_name": self.source_name,
            "class": self.category,
            "year": self.year,
            "desc": self.desc,
            "type_name": self.type_name,
            "douban_id": self.douban_id,
        }


@dataclass
class VideoInfo:
    """Descriptive metadata of a single video, keyed by source + id."""

    id: str
    source: str
    source_name: str
    title: str = ""
    cover: str = ""
    desc: str = ""
    type: str | None = None
    year: str = ""
    area: str | None = None
    director: str | None = None
    actor: str | None = None
    remarks: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "cover": self.cover,
            "desc": self.desc,
            "type": self.type,
            "year": self.year,
            "area": self.area,
            "director": self.director,
            "actor": self.actor,
            "remarks": self.remarks,
            "source_name": self.source_name,
            "source": self.source,
            "id": self.id,
        }


@dataclass
class VideoDetail:
    code: int
    episodes: list[str]
    detail_url: str
    video_info: VideoInfo

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "episodes": list(self.episodes),
            "detailUrl": self.detail_url,
            "videoInfo": self.video_info.to_dict(),
        }


@dataclass
class SearchResponse:
    """Caller-facing search outcome.

    ``error`` is set only when the search itself failed unexpectedly; an
    empty ``results`` list without ``error`` simply means nothing matched.
    """

    results: list[SearchResultItem] = field(default_factory=list)
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"results": [r.to_dict() for r in self.results]}
        if self.error is not None:
            data["error"] = self.error
        return data


class VodError(Exception):
    """Base error for video aggregation use cases."""


class DetailFetchError(VodError):
    """Upstream detail request failed (non-2xx status or transport fault)."""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class ContentInvalidError(VodError):
    """Upstream answered but the detail envelope carries no usable record."""


class SourceNotFoundError(VodError):
    """No source descriptor is configured under the requested key."""

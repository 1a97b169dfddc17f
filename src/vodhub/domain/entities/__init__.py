from .video import (
    DEFAULT_HEADERS,
    ContentInvalidError,
    DetailFetchError,
    SearchResponse,
    SearchResultItem,
    SourceDescriptor,
    SourceNotFoundError,
    VideoDetail,
    VideoInfo,
    VodError,
)

__all__ = [
    "DEFAULT_HEADERS",
    "ContentInvalidError",
    "DetailFetchError",
    "SearchResponse",
    "SearchResultItem",
    "SourceDescriptor",
    "SourceNotFoundError",
    "VideoDetail",
    "VideoInfo",
    "VodError",
]

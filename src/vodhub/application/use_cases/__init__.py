from .aggregated_search import AggregatedSearchUseCase
from .video_detail import VideoDetailUseCase

__all__ = ["AggregatedSearchUseCase", "VideoDetailUseCase"]

"""
In-memory caching utilities with strong typing.
"""
from typing import Optional

from cachetools import TTLCache

from ytmate.core.constants import YouTubeConfig
from ytmate.models.youtube import Video


# Fetched video metadata + transcript, keyed by video ID
video_cache: TTLCache[str, Video] = TTLCache(
    maxsize=YouTubeConfig.METADATA_CACHE_SIZE,
    ttl=YouTubeConfig.METADATA_CACHE_TTL,
)


def get_cached_video(video_id: str) -> Optional[Video]:
    """
    Retrieve cached video details.

    Args:
        video_id: The YouTube video ID.

    Returns:
        A copy of the cached Video if found, None otherwise.
    """
    video = video_cache.get(video_id)
    return video.model_copy(deep=True) if video else None


def set_cached_video(video: Video) -> None:
    """Cache fetched video details under their video ID."""
    video_cache[video.id] = video.model_copy(deep=True)

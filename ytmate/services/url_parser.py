"""
YouTube URL recognition and normalization.

Every function here is a pure, synchronous, total function over ``str``:
unrecognized input yields ``None`` (or an invalid ``ValidationResult``),
never an exception. Callers such as shared-text detection rely on silently
skipping input that does not match.
"""
import re
from typing import Optional
from urllib.parse import urlsplit

from ytmate.models.youtube import ThumbnailQuality, ValidationResult, VideoReference

WATCH_BASE_URL = "https://www.youtube.com/watch"
THUMBNAIL_BASE_URL = "https://img.youtube.com/vi"
YOUTUBE_DOMAINS = ("youtube.com", "youtu.be")

# Exactly 11 id characters, not followed by another id character.
_VIDEO_ID = r"([a-zA-Z0-9_-]{11})(?![a-zA-Z0-9_-])"

# Ordered: the first pattern that matches wins.
VIDEO_ID_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        # youtube.com/watch?v=ID or youtube.com/watch?...&v=ID
        r"(?:youtube\.com/watch\?v=|youtube\.com/watch\?.+&v=)" + _VIDEO_ID,
        # youtu.be/ID
        r"youtu\.be/" + _VIDEO_ID,
        # youtube.com/embed/ID
        r"youtube\.com/embed/" + _VIDEO_ID,
        # youtube.com/shorts/ID
        r"youtube\.com/shorts/" + _VIDEO_ID,
        # youtube.com/live/ID
        r"youtube\.com/live/" + _VIDEO_ID,
        # v parameter anywhere in the query: youtube.com/...?...v=ID
        r"youtube\.com/.+[?&]v=" + _VIDEO_ID,
        # Mobile share links: m.youtube.com/watch?...v=ID
        r"(?:m\.)?youtube\.com/watch\?.*v=" + _VIDEO_ID,
    )
)

PLAYLIST_ID_PATTERN = re.compile(r"[?&]list=([a-zA-Z0-9_-]+)", re.IGNORECASE)


class ValidationMessages:
    """Fixed, user-facing reasons returned by ``validate``."""
    EMPTY = "URL cannot be empty"
    INVALID_FORMAT = "Invalid URL format"
    NOT_YOUTUBE = "Not a YouTube URL"
    NO_VIDEO_ID = "Could not extract video ID from URL"


def extract_video_id(text: str) -> Optional[str]:
    """
    Extract the 11-character video ID from a YouTube URL.

    Args:
        text: Arbitrary text, surrounding whitespace is ignored.

    Returns:
        The video ID exactly as it appears in the input, or None.
    """
    trimmed = text.strip()

    for pattern in VIDEO_ID_PATTERNS:
        match = pattern.search(trimmed)
        if match:
            return match.group(1)

    return None


def is_valid_youtube_url(text: str) -> bool:
    """Check whether a video ID can be extracted from the text."""
    return extract_video_id(text) is not None


def normalize_url(text: str) -> Optional[str]:
    """
    Normalize a YouTube URL to ``https://www.youtube.com/watch?v=<id>``.

    Every other query parameter (playlist, timestamp, tracking) is dropped.
    """
    video_id = extract_video_id(text)
    if video_id is None:
        return None
    return f"{WATCH_BASE_URL}?v={video_id}"


def url_with_timestamp(video_id: str, seconds: int) -> str:
    """
    Build a watch URL that starts playback at the given offset.

    ``seconds`` is expected to be a non-negative integer and is not checked.
    """
    return f"{WATCH_BASE_URL}?v={video_id}&t={seconds}s"


def thumbnail_url(video_id: str, quality: ThumbnailQuality = ThumbnailQuality.MAX_RES) -> str:
    """
    Build the thumbnail URL for a video.

    The URL is derived from the ID alone; the max-res tier does not exist
    for every video.
    """
    return f"{THUMBNAIL_BASE_URL}/{video_id}/{quality.value}.jpg"


def _has_url_structure(text: str) -> bool:
    if any(ch.isspace() for ch in text):
        return False

    # Bare "youtu.be/..." style input has no scheme; parse it as a network path.
    candidate = text if "://" in text else f"//{text}"
    try:
        parts = urlsplit(candidate)
        host = parts.hostname
    except ValueError:
        return False

    return bool(host) and "." in host


def _host(text: str) -> str:
    candidate = text if "://" in text else f"//{text}"
    return (urlsplit(candidate).hostname or "").lower()


def validate(text: str) -> ValidationResult:
    """
    Validate a YouTube URL and report the first reason it fails.

    Checks run in a fixed order: empty input, URL structure, YouTube host,
    extractable video ID.

    Args:
        text: The URL offered by the user.

    Returns:
        ValidationResult with either the video details or an error message.
    """
    trimmed = text.strip()

    if not trimmed:
        return ValidationResult.failure(ValidationMessages.EMPTY)

    if not _has_url_structure(trimmed):
        return ValidationResult.failure(ValidationMessages.INVALID_FORMAT)

    # Substring match: lookalike hosts such as "notyoutube.com" pass.
    host = _host(trimmed)
    if not any(domain in host for domain in YOUTUBE_DOMAINS):
        return ValidationResult.failure(ValidationMessages.NOT_YOUTUBE)

    video_id = extract_video_id(trimmed)
    if video_id is None:
        return ValidationResult.failure(ValidationMessages.NO_VIDEO_ID)

    return ValidationResult(
        is_valid=True,
        video_id=video_id,
        normalized_url=normalize_url(trimmed),
        thumbnail_url=thumbnail_url(video_id),
    )


def extract_playlist_id(text: str) -> Optional[str]:
    """Extract the value of a ``list=`` query parameter, if present."""
    match = PLAYLIST_ID_PATTERN.search(text)
    if match:
        return match.group(1)
    return None


def is_playlist_url(text: str) -> bool:
    """Check whether the text carries a playlist ID."""
    return extract_playlist_id(text) is not None


def recognize(text: str) -> Optional[VideoReference]:
    """
    Recognize a video reference (and any co-occurring playlist) in the text.

    Returns:
        A VideoReference, or None when no video ID can be extracted.
    """
    video_id = extract_video_id(text)
    if video_id is None:
        return None
    return VideoReference(
        raw_input=text,
        video_id=video_id,
        playlist_id=extract_playlist_id(text),
    )

"""
Application-wide constants and configuration limits.

Grouped into static classes for namespace management and discoverability.
"""


class PaginationConfig:
    """Configuration for API pagination."""
    DEFAULT_LIMIT = 50
    MAX_LIMIT = 200


class RateLimitConfig:
    """Rate limiting thresholds (requests per minute)."""
    SUMMARIZE = "10/minute"
    DETECT = "60/minute"


class SummaryConfig:
    """Generation parameters for structured video summaries."""
    TEMPERATURE = 0.3  # Low for consistent JSON
    TOP_P = 0.8
    TOP_K = 40
    MAX_OUTPUT_TOKENS = 2048
    MIN_ACTION_ITEMS = 5
    MAX_ACTION_ITEMS = 10
    MAX_TRANSCRIPT_CHARS = 120_000  # ~30k tokens
    SNIPPET_LENGTH = 200


class YouTubeConfig:
    """Configuration for YouTube metadata and transcript fetching."""
    METADATA_CACHE_SIZE = 256
    METADATA_CACHE_TTL = 60 * 60  # seconds
    TRANSCRIPT_RETRY_ATTEMPTS = 3


class SearchConfig:
    """Configuration for the library search index."""
    DOMAIN_IDENTIFIER = "com.ytmate.summaries"
    DEFAULT_SUMMARY_TITLE = "Video Summary"

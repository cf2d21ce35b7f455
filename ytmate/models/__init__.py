from .youtube import ThumbnailQuality, VideoReference, ValidationResult, YtDlpVideoInfo, TranscriptSegment, Video
from .summary import GeneratedActionItem, GeneratedSummary
from .enums import LLMRole, LLMProviderType, SortOrder, VibeCategory, DifficultyLevel

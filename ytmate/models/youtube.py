from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

# --- URL Recognition Models ---

class ThumbnailQuality(str, Enum):
    """Thumbnail tiers served by img.youtube.com, mapped to their path tokens."""
    DEFAULT = "default"          # 120x90
    MEDIUM = "mqdefault"         # 320x180
    HIGH = "hqdefault"           # 480x360
    STANDARD = "sddefault"       # 640x480
    MAX_RES = "maxresdefault"    # 1280x720, not available for every video


class VideoReference(BaseModel):
    raw_input: str
    video_id: str
    playlist_id: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class ValidationResult(BaseModel):
    is_valid: bool
    video_id: Optional[str] = None
    normalized_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    error_message: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def check_outcome(self) -> "ValidationResult":
        """Exactly one of video_id / error_message is set."""
        if (self.video_id is None) == (self.error_message is None):
            raise ValueError("ValidationResult needs either a video_id or an error_message")
        if self.is_valid != (self.video_id is not None):
            raise ValueError("is_valid must match the presence of video_id")
        return self

    @classmethod
    def failure(cls, message: str) -> "ValidationResult":
        return cls(is_valid=False, error_message=message)

# --- Internal Parsing Models (yt-dlp) ---

class YtDlpVideoInfo(BaseModel):
    id: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    duration: Optional[float] = None

    model_config = ConfigDict(extra='ignore')

# --- Core Data Models ---

class TranscriptSegment(BaseModel):
    text: str
    start: float
    duration: float

    model_config = ConfigDict(frozen=True)


class Video(BaseModel):
    id: str
    url: str
    title: Optional[str] = None
    description: Optional[str] = None
    transcript: List[TranscriptSegment] = Field(default_factory=list)
    language: Optional[str] = None

    @property
    def timestamped_text(self) -> str:
        """Renders the transcript as ``[seconds] text`` lines for the model prompt."""
        return "\n".join(
            f"[{int(seg.start)}] {seg.text.strip()}"
            for seg in self.transcript
            if seg.text and seg.text.strip()
        )

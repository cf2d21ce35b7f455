"""
Pydantic models for API request/response schemas.
"""
from datetime import datetime
from typing import List, Optional
import uuid

from pydantic import BaseModel, ConfigDict, Field
from fastapi_users import schemas

from ytmate.models.sql import VideoSummaryModel


class SummarizeRequest(BaseModel):
    """Request model for video summarization."""

    url: str = Field(max_length=2048)
    user_notes: Optional[str] = Field(default=None, max_length=10_000)

    model_config = ConfigDict(extra="forbid")


class SummaryUpdateRequest(BaseModel):
    """Request model for editing a summary's personal notes."""

    user_notes: Optional[str] = Field(default=None, max_length=10_000)

    model_config = ConfigDict(extra="forbid")


class DetectRequest(BaseModel):
    """Request model for finding a YouTube link in shared or pasted text."""

    text: str = Field(max_length=10_000)

    model_config = ConfigDict(extra="forbid")


class DetectResponse(BaseModel):
    """Response model for link detection; all fields are null when nothing is found."""

    url: Optional[str] = None
    video_id: Optional[str] = None
    playlist_id: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class ActionItemResponse(BaseModel):
    """Response model for a single action item."""

    id: str
    emoji: str
    headline: str
    detail: str
    timestamp_seconds: int
    formatted_timestamp: str
    url: str
    order_index: int

    model_config = ConfigDict(frozen=True)


class SummaryResponse(BaseModel):
    """Response model for a full video summary."""

    id: str
    video_url: str
    video_id: str
    video_title: Optional[str] = None
    thumbnail_url: Optional[str] = None
    tldr: str
    difficulty_level: str
    vibe_category: str
    user_notes: Optional[str] = None
    action_items: List[ActionItemResponse]
    created_at: datetime
    updated_at: datetime
    is_synced: bool

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_model(cls, summary: VideoSummaryModel) -> "SummaryResponse":
        return cls(
            id=summary.id,
            video_url=summary.video_url,
            video_id=summary.video_id,
            video_title=summary.video_title,
            thumbnail_url=summary.thumbnail_url,
            tldr=summary.tldr,
            difficulty_level=summary.difficulty_level,
            vibe_category=summary.vibe_category,
            user_notes=summary.user_notes,
            action_items=[
                ActionItemResponse(
                    id=item.id,
                    emoji=item.emoji,
                    headline=item.headline,
                    detail=item.detail,
                    timestamp_seconds=item.timestamp_seconds,
                    formatted_timestamp=item.formatted_timestamp,
                    url=item.url_with_timestamp(summary.video_url),
                    order_index=item.order_index,
                )
                for item in sorted(summary.action_items, key=lambda x: x.order_index)
            ],
            created_at=summary.created_at,
            updated_at=summary.updated_at,
            is_synced=summary.is_synced,
        )


class SummaryListItem(BaseModel):
    """Response model for library list entries."""

    id: str
    video_id: str
    video_title: Optional[str] = None
    thumbnail_url: Optional[str] = None
    tldr_snippet: str
    difficulty_level: str
    vibe_category: str
    action_item_count: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_model(cls, summary: VideoSummaryModel, snippet_length: int = 200) -> "SummaryListItem":
        return cls(
            id=summary.id,
            video_id=summary.video_id,
            video_title=summary.video_title,
            thumbnail_url=summary.thumbnail_url,
            tldr_snippet=summary.tldr[:snippet_length],
            difficulty_level=summary.difficulty_level,
            vibe_category=summary.vibe_category,
            action_item_count=len(summary.action_items),
            created_at=summary.created_at,
            updated_at=summary.updated_at,
        )


class CategoryCount(BaseModel):
    """Number of summaries in one vibe category."""

    category: str
    count: int

    model_config = ConfigDict(frozen=True)


class SyncReport(BaseModel):
    """Outcome of a push + pull synchronization with the remote store."""

    pushed: int = 0
    failed: int = 0
    inserted: int = 0
    updated: int = 0


class SearchItem(BaseModel):
    """A searchable entry for a summary or one of its action items."""

    id: str
    domain: str
    summary_id: str
    action_item_id: Optional[str] = None
    title: str
    description: str
    keywords: List[str]
    subject: Optional[str] = None
    group: Optional[str] = None
    thumbnail_url: Optional[str] = None
    related_url: Optional[str] = None
    timestamp_seconds: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(frozen=True)


# FastAPI-Users schemas
class UserRead(schemas.BaseUser[uuid.UUID]):
    """Schema for reading user data."""

    pass


class UserCreate(schemas.BaseUserCreate):
    """Schema for creating users."""

    pass


class UserUpdate(schemas.BaseUserUpdate):
    """Schema for updating users."""

    pass

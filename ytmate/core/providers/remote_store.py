"""
Abstract base class for remote summary stores.

This module defines a vendor-neutral interface for the cloud document store
that mirrors each user's summary library. Concrete implementations
(Firestore) must implement this interface.
"""
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError


def _naive_utc(value: Any) -> Optional[datetime]:
    if not isinstance(value, datetime):
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class RemoteStoreError(Exception):
    """
    Failure talking to the remote store.

    Attributes:
        operation: One of "save", "fetch", "delete", "sync".
    """

    _PREFIXES = {
        "save": "Failed to save",
        "fetch": "Failed to fetch",
        "delete": "Failed to delete",
        "sync": "Sync failed",
    }

    def __init__(self, operation: str, message: str):
        self.operation = operation
        self.message = message
        super().__init__(f"{self._PREFIXES.get(operation, operation)}: {message}")


class RemoteActionItem(BaseModel):
    """Action item as stored inside a remote summary document."""

    id: str
    emoji: str
    headline: str
    detail: str
    timestamp_seconds: int
    order_index: int = 0

    model_config = ConfigDict(frozen=True)

    def to_document(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "emoji": self.emoji,
            "headline": self.headline,
            "detail": self.detail,
            "timestampSeconds": self.timestamp_seconds,
            "orderIndex": self.order_index,
        }

    @classmethod
    def from_document(cls, data: dict[str, Any]) -> Optional["RemoteActionItem"]:
        try:
            return cls(
                id=data["id"],
                emoji=data["emoji"],
                headline=data["headline"],
                detail=data["detail"],
                timestamp_seconds=data["timestampSeconds"],
                order_index=data.get("orderIndex") or 0,
            )
        except (KeyError, TypeError, ValidationError):
            return None


class RemoteSummary(BaseModel):
    """
    A summary in its remote document form.

    ``remote_id`` is the document id assigned by the store and is not part
    of the document body. ``user_id`` is the owner's id as a string.
    """

    id: str
    user_id: str
    video_url: str
    video_id: str
    video_title: Optional[str] = None
    thumbnail_url: Optional[str] = None
    tldr: str
    difficulty_level: str
    vibe_category: str
    action_items: list[RemoteActionItem] = Field(default_factory=list)
    user_notes: Optional[str] = None
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)
    remote_id: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    def to_document(self) -> dict[str, Any]:
        """Serialize to the camelCase document body. Optional fields are omitted when unset."""
        data: dict[str, Any] = {
            "id": self.id,
            "videoURL": self.video_url,
            "videoId": self.video_id,
            "tldr": self.tldr,
            "difficultyLevel": self.difficulty_level,
            "vibeCategory": self.vibe_category,
            "actionItems": [item.to_document() for item in self.action_items],
            "createdAt": self.created_at.replace(tzinfo=timezone.utc),
            "updatedAt": self.updated_at.replace(tzinfo=timezone.utc),
            "userId": self.user_id,
        }
        if self.video_title is not None:
            data["videoTitle"] = self.video_title
        if self.thumbnail_url is not None:
            data["thumbnailURL"] = self.thumbnail_url
        if self.user_notes is not None:
            data["userNotes"] = self.user_notes
        return data

    @classmethod
    def from_document(cls, data: dict[str, Any], document_id: str) -> Optional["RemoteSummary"]:
        """
        Decode a remote document.

        Args:
            data: Document body.
            document_id: Id assigned by the store.

        Returns:
            The decoded summary, or None when a required field is missing
            or has the wrong type. Malformed action items are dropped.
        """
        required = ("id", "videoURL", "videoId", "tldr", "difficultyLevel", "vibeCategory", "userId")
        if any(not isinstance(data.get(key), str) for key in required):
            return None

        raw_items = data.get("actionItems")
        if not isinstance(raw_items, list):
            raw_items = []

        items = [
            item
            for item in (
                RemoteActionItem.from_document(raw)
                for raw in raw_items
                if isinstance(raw, dict)
            )
            if item is not None
        ]

        try:
            return cls(
                id=data["id"],
                user_id=data["userId"],
                video_url=data["videoURL"],
                video_id=data["videoId"],
                video_title=data.get("videoTitle"),
                thumbnail_url=data.get("thumbnailURL"),
                tldr=data["tldr"],
                difficulty_level=data["difficultyLevel"],
                vibe_category=data["vibeCategory"],
                action_items=items,
                user_notes=data.get("userNotes"),
                created_at=_naive_utc(data.get("createdAt")) or _now(),
                updated_at=_naive_utc(data.get("updatedAt")) or _now(),
                remote_id=document_id,
            )
        except ValidationError:
            return None


class RemoteStore(ABC):
    """
    Abstract interface for the remote summary store.

    Implementations must provide:
    - save: Create or merge a summary document
    - fetch_all: All summaries of a user, newest first
    - fetch_one: A single summary by its local id
    - delete / delete_many: Remove documents by remote id

    Every method raises RemoteStoreError on failure.

    Example:
        store = FirestoreRemoteStore(client=firestore.AsyncClient())
        remote_id = await store.save(summary)
        summaries = await store.fetch_all(user_id="...")
    """

    @abstractmethod
    async def save(self, summary: RemoteSummary) -> str:
        """
        Persist a summary.

        Writes with merge semantics to the document named by
        ``summary.remote_id``, or by ``summary.id`` when no remote id is
        known yet, so a retried save never creates a second document.

        Returns:
            The remote document id.
        """
        ...

    @abstractmethod
    async def fetch_all(self, user_id: str) -> list[RemoteSummary]:
        """Fetch every decodable summary owned by ``user_id``, newest first."""
        ...

    @abstractmethod
    async def fetch_one(self, summary_id: str, user_id: str) -> Optional[RemoteSummary]:
        """Fetch one summary by its local id, or None when absent."""
        ...

    @abstractmethod
    async def delete(self, remote_id: str) -> None:
        """Delete a single document."""
        ...

    @abstractmethod
    async def delete_many(self, remote_ids: list[str]) -> None:
        """Delete several documents in one batch."""
        ...

from datetime import datetime, timezone
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit
import uuid

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from fastapi_users.db import SQLAlchemyBaseUserTableUUID
from fastapi_users_db_sqlalchemy.generics import GUID

from ytmate.core.db import Base


def utcnow() -> datetime:
    """Naive UTC timestamp, the form stored in the local database."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def new_id() -> str:
    return str(uuid.uuid4()).upper()


class User(SQLAlchemyBaseUserTableUUID, Base):
    """
    SQLAlchemy ORM model representing an authenticated user.
    """
    __tablename__ = "users"


class VideoSummaryModel(Base):
    """
    SQLAlchemy ORM model representing a summarized YouTube video.

    Attributes:
        id (str): Unique identifier (UUID string).
        user_id (UUID): Owner of the summary.
        video_url (str): Normalized watch URL.
        video_id (str): The 11-character YouTube video ID.
        video_title (str): Video title, when it could be fetched.
        thumbnail_url (str): Thumbnail derived from the video ID.
        tldr (str): Two-sentence summary.
        difficulty_level (str): DifficultyLevel value.
        vibe_category (str): VibeCategory value.
        user_notes (str): Free-form notes added by the owner.
        is_synced (bool): Whether the latest local state reached the remote store.
        remote_id (str): Remote document ID, once synced.
    """
    __tablename__ = "video_summaries"

    id = Column(String, primary_key=True, default=new_id)
    user_id = Column(GUID, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    video_url = Column(String, nullable=False)
    video_id = Column(String(11), index=True, nullable=False)
    video_title = Column(String, nullable=True)
    thumbnail_url = Column(String, nullable=True)
    tldr = Column(Text, nullable=False)
    difficulty_level = Column(String, nullable=False)
    vibe_category = Column(String, index=True, nullable=False)
    user_notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow, index=True, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)
    is_synced = Column(Boolean, default=False, nullable=False)
    remote_id = Column(String, nullable=True)

    action_items = relationship(
        "ActionItemModel",
        back_populates="summary",
        cascade="all, delete-orphan",
        order_by="ActionItemModel.order_index",
        lazy="selectin",
    )

    def touch(self) -> None:
        """Record a local edit: bump updated_at and queue the summary for sync."""
        self.updated_at = utcnow()
        self.is_synced = False


class ActionItemModel(Base):
    """
    SQLAlchemy ORM model representing one actionable item of a summary.

    Attributes:
        id (str): Unique identifier (UUID string).
        summary_id (str): Foreign key to the parent summary.
        emoji (str): Emoji representing the action type.
        headline (str): Short, verb-first headline.
        detail (str): Additional context or instructions.
        timestamp_seconds (int): Where in the video the action is discussed.
        order_index (int): Display order.
    """
    __tablename__ = "action_items"

    id = Column(String, primary_key=True, default=new_id)
    summary_id = Column(
        String, ForeignKey("video_summaries.id", ondelete="CASCADE"), index=True, nullable=False
    )
    emoji = Column(String, nullable=False)
    headline = Column(String, nullable=False)
    detail = Column(Text, nullable=False)
    timestamp_seconds = Column(Integer, default=0, nullable=False)
    order_index = Column(Integer, default=0, nullable=False)

    summary = relationship("VideoSummaryModel", back_populates="action_items")

    @property
    def formatted_timestamp(self) -> str:
        """Timestamp as M:SS, or H:MM:SS past the first hour."""
        total = self.timestamp_seconds or 0
        hours, remainder = divmod(total, 3600)
        minutes, seconds = divmod(remainder, 60)
        if hours > 0:
            return f"{hours}:{minutes:02d}:{seconds:02d}"
        return f"{minutes}:{seconds:02d}"

    def url_with_timestamp(self, base_url: str) -> str:
        """Return ``base_url`` with its ``t`` parameter set to this item's timestamp."""
        parts = urlsplit(base_url)
        query = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k != "t"]
        query.append(("t", f"{self.timestamp_seconds}s"))
        return urlunsplit(parts._replace(query=urlencode(query)))

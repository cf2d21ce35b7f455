from typing import Dict, List, Optional
import uuid

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ytmate.models.enums import SortOrder
from ytmate.models.sql import ActionItemModel, VideoSummaryModel


class SummaryRepository:
    """
    Repository layer for managing VideoSummaryModel data in the database.
    Abstracts direct SQLAlchemy sessions and operations.
    """
    def __init__(self, db: AsyncSession):
        """
        Initialize the SummaryRepository.

        Args:
            db (AsyncSession): The SQLAlchemy async session for database operations.
        """
        self.db = db

    def _base_query(self, user_id: uuid.UUID):
        return (
            select(VideoSummaryModel)
            .where(VideoSummaryModel.user_id == user_id)
            .options(selectinload(VideoSummaryModel.action_items))
        )

    async def create(self, summary: VideoSummaryModel) -> VideoSummaryModel:
        """
        Saves a new summary, together with its action items.

        Args:
            summary (VideoSummaryModel): The summary object to save.

        Returns:
            VideoSummaryModel: The saved summary with updated state.
        """
        self.db.add(summary)
        await self.db.commit()
        await self.db.refresh(summary)
        return summary

    async def update(self, summary: VideoSummaryModel) -> VideoSummaryModel:
        """
        Persists changes to an existing summary.
        """
        self.db.add(summary)
        await self.db.commit()
        await self.db.refresh(summary)
        return summary

    async def update_many(self, summaries: List[VideoSummaryModel]) -> None:
        """
        Persists changes to several summaries in a single transaction.
        """
        if not summaries:
            return
        self.db.add_all(summaries)
        await self.db.commit()

    async def delete(self, summary: VideoSummaryModel) -> None:
        """
        Deletes a summary. Its action items are removed by cascade.
        """
        await self.db.delete(summary)
        await self.db.commit()

    async def get_for_user(self, summary_id: str, user_id: uuid.UUID) -> Optional[VideoSummaryModel]:
        """
        Retrieves a summary by ID, scoped to its owner, with action items eagerly loaded.
        """
        query = self._base_query(user_id).where(VideoSummaryModel.id == summary_id)
        result = await self.db.execute(query)
        return result.scalars().first()

    async def get_by_ids(self, summary_ids: List[str], user_id: uuid.UUID) -> List[VideoSummaryModel]:
        """
        Retrieves the subset of ``summary_ids`` that exist locally for the user.

        Args:
            summary_ids (List[str]): Summary IDs to look up.
            user_id (uuid.UUID): Owner to scope the lookup to.

        Returns:
            List[VideoSummaryModel]: The summaries found, in no particular order.
        """
        if not summary_ids:
            return []
        query = self._base_query(user_id).where(VideoSummaryModel.id.in_(summary_ids))
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def list_for_user(
        self,
        user_id: uuid.UUID,
        search: Optional[str] = None,
        category: Optional[str] = None,
        sort: SortOrder = SortOrder.NEWEST,
        limit: int = 50,
        offset: int = 0,
    ) -> List[VideoSummaryModel]:
        """
        Retrieves a page of the user's library.

        Args:
            user_id (uuid.UUID): The user ID to filter by.
            search (Optional[str]): Case-insensitive text matched against the TL;DR,
                the video title and every action item headline.
            category (Optional[str]): Exact vibe category to keep.
            sort (SortOrder): newest, oldest or alphabetical by title
                (a missing title sorts as an empty string).
            limit (int): Maximum number of records to return.
            offset (int): Number of records to skip.

        Returns:
            List[VideoSummaryModel]: The matching summaries.
        """
        query = self._base_query(user_id)

        term = (search or "").strip()
        if term:
            query = query.where(
                or_(
                    VideoSummaryModel.tldr.icontains(term, autoescape=True),
                    VideoSummaryModel.video_title.icontains(term, autoescape=True),
                    VideoSummaryModel.action_items.any(
                        ActionItemModel.headline.icontains(term, autoescape=True)
                    ),
                )
            )

        if category:
            query = query.where(VideoSummaryModel.vibe_category == category)

        if sort == SortOrder.OLDEST:
            query = query.order_by(VideoSummaryModel.created_at.asc())
        elif sort == SortOrder.ALPHABETICAL:
            query = query.order_by(
                func.lower(func.coalesce(VideoSummaryModel.video_title, "")).asc(),
                VideoSummaryModel.created_at.desc(),
            )
        else:
            query = query.order_by(VideoSummaryModel.created_at.desc())

        result = await self.db.execute(query.limit(limit).offset(offset))
        return list(result.scalars().all())

    async def list_all_for_user(self, user_id: uuid.UUID) -> List[VideoSummaryModel]:
        """
        Retrieves every summary of the user, newest first.
        """
        query = self._base_query(user_id).order_by(VideoSummaryModel.created_at.desc())
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_unsynced(self, user_id: uuid.UUID) -> List[VideoSummaryModel]:
        """
        Retrieves the user's summaries whose latest state has not reached the remote store.
        """
        query = (
            self._base_query(user_id)
            .where(VideoSummaryModel.is_synced.is_(False))
            .order_by(VideoSummaryModel.created_at.asc())
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def category_counts(self, user_id: uuid.UUID) -> Dict[str, int]:
        """
        Counts the user's summaries per vibe category. Empty categories are omitted.
        """
        query = (
            select(VideoSummaryModel.vibe_category, func.count(VideoSummaryModel.id))
            .where(VideoSummaryModel.user_id == user_id)
            .group_by(VideoSummaryModel.vibe_category)
        )
        result = await self.db.execute(query)
        return {category: count for category, count in result.all()}

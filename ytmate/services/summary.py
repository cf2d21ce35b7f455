"""
Summary orchestration: from a pasted link to a stored, mirrored summary.
"""
from typing import Dict, List, Optional
import time
import uuid

from loguru import logger

from ytmate.core.constants import PaginationConfig
from ytmate.core.exceptions import BadGatewayError, BadRequestError, NotFoundError
from ytmate.core.providers.remote_store import RemoteStoreError
from ytmate.models import GeneratedSummary, SortOrder, ThumbnailQuality, VideoReference
from ytmate.models.api import SearchItem
from ytmate.models.sql import ActionItemModel, VideoSummaryModel, new_id, utcnow
from ytmate.repositories.summary import SummaryRepository
from ytmate.services import search as search_index
from ytmate.services import url_parser
from ytmate.services.summarization import SummarizationService, SummaryGenerationError
from ytmate.services.sync import SyncService
from ytmate.services.youtube import YouTubeService


def build_summary_model(
    user_id: uuid.UUID,
    video_url: str,
    video_id: str,
    generated: GeneratedSummary,
    video_title: Optional[str] = None,
    user_notes: Optional[str] = None,
) -> VideoSummaryModel:
    """
    Turn a generated summary into a new, unsynced local summary.

    Action items keep the order the model returned them in.
    """
    now = utcnow()
    return VideoSummaryModel(
        id=new_id(),
        user_id=user_id,
        video_url=video_url,
        video_id=video_id,
        video_title=video_title,
        thumbnail_url=url_parser.thumbnail_url(video_id, ThumbnailQuality.MAX_RES),
        tldr=generated.summary,
        difficulty_level=generated.difficulty_level.value,
        vibe_category=generated.vibe_category.value,
        user_notes=user_notes,
        created_at=now,
        updated_at=now,
        is_synced=False,
        action_items=[
            ActionItemModel(
                id=new_id(),
                emoji=item.emoji,
                headline=item.headline,
                detail=item.detail,
                timestamp_seconds=item.timestamp,
                order_index=index,
            )
            for index, item in enumerate(generated.action_items)
        ],
    )


class SummaryService:
    """
    Coordinates URL recognition, video lookup, generation, storage and sync.

    Every public method is scoped to a single user.
    """

    def __init__(
        self,
        repository: SummaryRepository,
        youtube_service: YouTubeService,
        summarization_service: SummarizationService,
        sync_service: SyncService,
    ):
        self.repository = repository
        self.youtube_service = youtube_service
        self.summarization_service = summarization_service
        self.sync_service = sync_service

    async def create_summary(
        self, user_id: uuid.UUID, url: str, user_notes: Optional[str] = None
    ) -> VideoSummaryModel:
        """
        Summarize a YouTube video and store it in the user's library.

        Args:
            user_id: Owner of the new summary.
            url: Link offered by the user.
            user_notes: Optional initial notes.

        Returns:
            VideoSummaryModel: The stored summary. ``is_synced`` tells whether
            the best-effort push to the remote store succeeded.

        Raises:
            BadRequestError: The link is not a usable YouTube video link.
            BadGatewayError: The summary could not be generated.
        """
        validation = url_parser.validate(url)
        if not validation.is_valid:
            raise BadRequestError(validation.error_message)

        reference = VideoReference(
            raw_input=url,
            video_id=validation.video_id,
            playlist_id=url_parser.extract_playlist_id(url),
        )

        start_time = time.perf_counter()
        video = await self.youtube_service.fetch_video(reference, validation.normalized_url)

        try:
            generated = await self.summarization_service.summarize(video)
        except SummaryGenerationError as e:
            raise BadGatewayError(e.message) from e

        summary = build_summary_model(
            user_id=user_id,
            video_url=validation.normalized_url,
            video_id=validation.video_id,
            generated=generated,
            video_title=video.title,
            user_notes=user_notes,
        )
        summary = await self.repository.create(summary)
        logger.info(
            f"Stored summary {summary.id} for video {summary.video_id} "
            f"({len(summary.action_items)} action items) in {time.perf_counter() - start_time:.2f}s"
        )

        await self.sync_service.sync_summary_best_effort(summary)
        return summary

    async def get_summary(self, summary_id: str, user_id: uuid.UUID) -> VideoSummaryModel:
        """
        Raises:
            NotFoundError: Missing, or owned by someone else.
        """
        summary = await self.repository.get_for_user(summary_id, user_id)
        if not summary:
            raise NotFoundError("Summary", summary_id)
        return summary

    async def list_summaries(
        self,
        user_id: uuid.UUID,
        search: Optional[str] = None,
        category: Optional[str] = None,
        sort: SortOrder = SortOrder.NEWEST,
        limit: int = PaginationConfig.DEFAULT_LIMIT,
        offset: int = 0,
    ) -> List[VideoSummaryModel]:
        return await self.repository.list_for_user(
            user_id, search=search, category=category, sort=sort, limit=limit, offset=offset
        )

    async def update_notes(
        self, summary_id: str, user_id: uuid.UUID, user_notes: Optional[str]
    ) -> VideoSummaryModel:
        """
        Replace the personal notes of a summary.

        The edit bumps ``updated_at`` and queues the summary for the next sync.
        """
        summary = await self.get_summary(summary_id, user_id)
        summary.user_notes = user_notes
        summary.touch()
        return await self.repository.update(summary)

    async def delete_summary(self, summary_id: str, user_id: uuid.UUID) -> None:
        """
        Delete a summary locally and remotely.

        The remote copy is deleted first. A remote failure is logged and does
        not block the local delete.
        """
        summary = await self.get_summary(summary_id, user_id)
        try:
            await self.sync_service.delete_remote(summary)
        except RemoteStoreError as e:
            logger.warning(f"Remote delete failed for summary {summary_id}: {e}")

        await self.repository.delete(summary)
        logger.info(f"User {user_id} deleted summary {summary_id}")

    async def category_counts(self, user_id: uuid.UUID) -> Dict[str, int]:
        return await self.repository.category_counts(user_id)

    async def search(self, user_id: uuid.UUID, query: str) -> List[SearchItem]:
        summaries = await self.repository.list_all_for_user(user_id)
        return search_index.search(summaries, query)

"""
Synchronization between the local summary library and the remote store.

Local rows are the source of truth for the client. The remote store is a
mirror used to restore and share a library across devices. Conflicts are
resolved per summary with last-writer-wins on ``updated_at``.
"""
import asyncio
from typing import List, Tuple
import uuid

from loguru import logger

from ytmate.core.exceptions import BadGatewayError
from ytmate.core.providers.remote_store import (
    RemoteActionItem,
    RemoteStore,
    RemoteStoreError,
    RemoteSummary,
)
from ytmate.models.api import SyncReport
from ytmate.models.sql import ActionItemModel, VideoSummaryModel
from ytmate.repositories.summary import SummaryRepository


def to_remote(summary: VideoSummaryModel) -> RemoteSummary:
    """Convert a local summary to its remote form."""
    return RemoteSummary(
        id=summary.id,
        user_id=str(summary.user_id),
        video_url=summary.video_url,
        video_id=summary.video_id,
        video_title=summary.video_title,
        thumbnail_url=summary.thumbnail_url,
        tldr=summary.tldr,
        difficulty_level=summary.difficulty_level,
        vibe_category=summary.vibe_category,
        action_items=[
            RemoteActionItem(
                id=item.id,
                emoji=item.emoji,
                headline=item.headline,
                detail=item.detail,
                timestamp_seconds=item.timestamp_seconds,
                order_index=item.order_index,
            )
            for item in summary.action_items
        ],
        user_notes=summary.user_notes,
        created_at=summary.created_at,
        updated_at=summary.updated_at,
        remote_id=summary.remote_id,
    )


def from_remote(remote: RemoteSummary, user_id: uuid.UUID) -> VideoSummaryModel:
    """Build a new, already synced local summary from its remote form."""
    return VideoSummaryModel(
        id=remote.id,
        user_id=user_id,
        video_url=remote.video_url,
        video_id=remote.video_id,
        video_title=remote.video_title,
        thumbnail_url=remote.thumbnail_url,
        tldr=remote.tldr,
        difficulty_level=remote.difficulty_level,
        vibe_category=remote.vibe_category,
        user_notes=remote.user_notes,
        created_at=remote.created_at,
        updated_at=remote.updated_at,
        is_synced=True,
        remote_id=remote.remote_id,
        action_items=[
            ActionItemModel(
                id=item.id,
                emoji=item.emoji,
                headline=item.headline,
                detail=item.detail,
                timestamp_seconds=item.timestamp_seconds,
                order_index=item.order_index,
            )
            for item in remote.action_items
        ],
    )


def apply_remote(local: VideoSummaryModel, remote: RemoteSummary) -> bool:
    """
    Apply a remote summary to its local copy when the remote one is newer.

    Only the mutable fields are copied: tldr, vibe category, difficulty,
    notes and the modification time.

    Returns:
        True if the local summary changed.
    """
    if remote.updated_at <= local.updated_at:
        return False

    local.tldr = remote.tldr
    local.vibe_category = remote.vibe_category
    local.difficulty_level = remote.difficulty_level
    local.user_notes = remote.user_notes
    local.updated_at = remote.updated_at
    return True


class SyncService:
    """
    Pushes unsynced local summaries and pulls remote ones.

    Attributes:
        remote_store: The remote mirror.
        repository: Local summary storage.
        timeout: Upper bound in seconds for a best-effort push.
    """

    def __init__(self, remote_store: RemoteStore, repository: SummaryRepository, timeout: float = 10.0):
        self.remote_store = remote_store
        self.repository = repository
        self.timeout = timeout

    async def push_summary(self, summary: VideoSummaryModel) -> None:
        """
        Save one summary remotely and mark it synced. The caller persists the change.

        Raises:
            RemoteStoreError: The remote save failed.
        """
        remote_id = await self.remote_store.save(to_remote(summary))
        summary.remote_id = remote_id
        summary.is_synced = True

    async def push_unsynced(self, user_id: uuid.UUID) -> Tuple[int, int]:
        """
        Push every local summary that is not synced yet.

        Individual failures are logged and skipped; the summary stays
        unsynced and is retried on the next sync.

        Returns:
            (pushed, failed) counts.
        """
        pending = await self.repository.get_unsynced(user_id)
        pushed: List[VideoSummaryModel] = []
        failed = 0

        for summary in pending:
            try:
                await self.push_summary(summary)
                pushed.append(summary)
            except RemoteStoreError as e:
                failed += 1
                logger.warning(f"Failed to sync summary {summary.id}: {e}")

        await self.repository.update_many(pushed)
        logger.info(f"Pushed {len(pushed)} summaries for user {user_id} ({failed} failed)")
        return len(pushed), failed

    async def pull_remote(self, user_id: uuid.UUID) -> Tuple[int, int]:
        """
        Import remote summaries into the local library.

        Summaries missing locally are inserted as synced. Existing ones are
        updated only when the remote copy is newer.

        Returns:
            (inserted, updated) counts.

        Raises:
            RemoteStoreError: The remote fetch failed.
        """
        remote_summaries = await self.remote_store.fetch_all(str(user_id))
        if not remote_summaries:
            return 0, 0

        existing = await self.repository.get_by_ids([r.id for r in remote_summaries], user_id)
        local_map = {s.id: s for s in existing}

        inserted: List[VideoSummaryModel] = []
        updated: List[VideoSummaryModel] = []
        for remote in remote_summaries:
            local = local_map.get(remote.id)
            if local is None:
                new_summary = from_remote(remote, user_id)
                inserted.append(new_summary)
                local_map[remote.id] = new_summary
            elif apply_remote(local, remote):
                updated.append(local)

        await self.repository.update_many(inserted + updated)
        logger.info(f"Pulled remote library for user {user_id}: {len(inserted)} new, {len(updated)} updated")
        return len(inserted), len(updated)

    async def sync(self, user_id: uuid.UUID) -> SyncReport:
        """
        Full two-way synchronization: push local changes, then pull remote ones.

        Raises:
            BadGatewayError: The remote library could not be fetched.
        """
        pushed, failed = await self.push_unsynced(user_id)
        try:
            inserted, updated = await self.pull_remote(user_id)
        except RemoteStoreError as e:
            logger.error(f"Sync failed for user {user_id}: {e}")
            raise BadGatewayError(str(e)) from e

        return SyncReport(pushed=pushed, failed=failed, inserted=inserted, updated=updated)

    async def sync_summary_best_effort(self, summary: VideoSummaryModel) -> bool:
        """
        Try to mirror a freshly stored summary without failing the caller.

        Errors and timeouts are logged; the summary then stays unsynced until
        the next full sync.

        Returns:
            True if the summary reached the remote store.
        """
        try:
            await asyncio.wait_for(self.push_summary(summary), timeout=self.timeout)
            await self.repository.update(summary)
        except asyncio.TimeoutError:
            summary.is_synced = False
            logger.warning(f"Timed out syncing summary {summary.id} after {self.timeout}s")
            return False
        except Exception as e:
            summary.is_synced = False
            logger.warning(f"Could not sync summary {summary.id}: {e}")
            return False

        logger.debug(f"Summary {summary.id} synced as {summary.remote_id}")
        return True

    async def delete_remote(self, summary: VideoSummaryModel) -> None:
        """
        Delete the remote copy of a summary. No-op for summaries never synced.

        Raises:
            RemoteStoreError: The remote delete failed.
        """
        if not summary.remote_id:
            return
        await self.remote_store.delete(summary.remote_id)

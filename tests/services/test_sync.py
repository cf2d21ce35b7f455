import asyncio
import uuid
from datetime import datetime
from typing import Optional

import pytest
from unittest.mock import AsyncMock

from ytmate.core.exceptions import BadGatewayError
from ytmate.core.providers.remote_store import RemoteStore, RemoteStoreError, RemoteSummary
from ytmate.models.sql import VideoSummaryModel
from ytmate.repositories.summary import SummaryRepository
from ytmate.services.sync import SyncService, apply_remote, from_remote, to_remote


class InMemoryRemoteStore(RemoteStore):
    """Remote store keeping documents in a dict, keyed by remote id."""

    def __init__(self):
        self.documents: dict[str, dict] = {}
        self.fail_save_for: set[str] = set()
        self.fail_fetch = False

    async def save(self, summary: RemoteSummary) -> str:
        if summary.id in self.fail_save_for:
            raise RemoteStoreError("save", "unavailable")
        remote_id = summary.remote_id or summary.id
        self.documents[remote_id] = summary.to_document()
        return remote_id

    async def fetch_all(self, user_id: str) -> list[RemoteSummary]:
        if self.fail_fetch:
            raise RemoteStoreError("fetch", "unavailable")
        decoded = [RemoteSummary.from_document(data, doc_id) for doc_id, data in self.documents.items()]
        return sorted(
            (s for s in decoded if s is not None and s.user_id == user_id),
            key=lambda s: s.created_at,
            reverse=True,
        )

    async def fetch_one(self, summary_id: str, user_id: str) -> Optional[RemoteSummary]:
        for summary in await self.fetch_all(user_id):
            if summary.id == summary_id:
                return summary
        return None

    async def delete(self, remote_id: str) -> None:
        self.documents.pop(remote_id, None)

    async def delete_many(self, remote_ids: list[str]) -> None:
        for remote_id in remote_ids:
            await self.delete(remote_id)


@pytest.fixture
def remote_store():
    return InMemoryRemoteStore()


@pytest.fixture
def repository(db_session):
    return SummaryRepository(db_session)


@pytest.fixture
def sync_service(remote_store, repository):
    return SyncService(remote_store=remote_store, repository=repository, timeout=1.0)


# --- Conversion ---

def test_to_remote_and_back(make_summary, mock_user_id):
    local = make_summary(summary_id="S1", remote_id="doc-9")
    remote = to_remote(local)

    assert remote.user_id == str(mock_user_id)
    assert remote.remote_id == "doc-9"
    assert [item.timestamp_seconds for item in remote.action_items] == [45, 3725]

    restored = from_remote(remote, mock_user_id)
    assert restored.is_synced is True
    assert restored.remote_id == "doc-9"
    assert restored.tldr == local.tldr
    assert [item.id for item in restored.action_items] == ["S1-A1", "S1-A2"]


def test_apply_remote_last_writer_wins(make_summary):
    local = make_summary(summary_id="S1")
    newer = to_remote(local).model_copy(
        update={"tldr": "Remote edit.", "user_notes": "from phone", "updated_at": datetime(2026, 1, 2)}
    )
    older = to_remote(local).model_copy(update={"tldr": "Stale.", "updated_at": datetime(2025, 12, 31)})

    assert apply_remote(local, older) is False
    assert local.tldr != "Stale."

    assert apply_remote(local, newer) is True
    assert local.tldr == "Remote edit."
    assert local.user_notes == "from phone"
    assert local.updated_at == datetime(2026, 1, 2)


def test_apply_remote_equal_timestamps_keep_local(make_summary):
    local = make_summary(summary_id="S1")
    same = to_remote(local).model_copy(update={"tldr": "Other."})
    assert apply_remote(local, same) is False


# --- Push ---

@pytest.mark.asyncio
async def test_push_unsynced(sync_service, repository, remote_store, make_summary, mock_user_id):
    await repository.create(make_summary(summary_id="S1"))
    await repository.create(make_summary(summary_id="S2"))
    await repository.create(make_summary(summary_id="S3", is_synced=True, remote_id="doc-x"))
    remote_store.fail_save_for.add("S2")

    pushed, failed = await sync_service.push_unsynced(mock_user_id)

    assert (pushed, failed) == (1, 1)
    s1 = await repository.get_for_user("S1", mock_user_id)
    s2 = await repository.get_for_user("S2", mock_user_id)
    assert s1.is_synced is True
    assert s1.remote_id in remote_store.documents
    assert s2.is_synced is False
    assert s2.remote_id is None


@pytest.mark.asyncio
async def test_push_reuses_remote_id(sync_service, repository, remote_store, make_summary, mock_user_id):
    summary = await repository.create(make_summary(summary_id="S1"))
    await sync_service.push_unsynced(mock_user_id)
    first_remote_id = summary.remote_id

    summary.user_notes = "edited"
    summary.touch()
    await repository.update(summary)
    await sync_service.push_unsynced(mock_user_id)

    assert summary.remote_id == first_remote_id
    assert len(remote_store.documents) == 1
    assert remote_store.documents[first_remote_id]["userNotes"] == "edited"


# --- Pull ---

@pytest.mark.asyncio
async def test_pull_inserts_missing_summaries(sync_service, repository, remote_store, make_summary, mock_user_id):
    await remote_store.save(to_remote(make_summary(summary_id="R1")))

    inserted, updated = await sync_service.pull_remote(mock_user_id)

    assert (inserted, updated) == (1, 0)
    local = await repository.get_for_user("R1", mock_user_id)
    assert local.is_synced is True
    assert local.remote_id == "R1"
    assert len(local.action_items) == 2


@pytest.mark.asyncio
async def test_pull_updates_only_newer_remote(sync_service, repository, remote_store, make_summary, mock_user_id):
    await repository.create(make_summary(summary_id="S1", is_synced=True, remote_id="doc-1"))
    await repository.create(make_summary(summary_id="S2", is_synced=True, remote_id="doc-2"))

    newer = make_summary(summary_id="S1", tldr="Newer remote tldr.", remote_id="doc-1")
    newer.updated_at = datetime(2026, 2, 1)
    older = make_summary(summary_id="S2", tldr="Older remote tldr.", remote_id="doc-2")
    older.updated_at = datetime(2025, 1, 1)
    await remote_store.save(to_remote(newer))
    await remote_store.save(to_remote(older))

    inserted, updated = await sync_service.pull_remote(mock_user_id)

    assert (inserted, updated) == (0, 1)
    assert (await repository.get_for_user("S1", mock_user_id)).tldr == "Newer remote tldr."
    assert (await repository.get_for_user("S2", mock_user_id)).tldr != "Older remote tldr."


@pytest.mark.asyncio
async def test_pull_ignores_other_users(sync_service, repository, remote_store, make_summary, mock_user_id):
    await remote_store.save(to_remote(make_summary(summary_id="X1", user_id=uuid.uuid4())))

    assert await sync_service.pull_remote(mock_user_id) == (0, 0)


@pytest.mark.asyncio
async def test_sync_reports_counts(sync_service, repository, remote_store, make_summary, mock_user_id):
    await repository.create(make_summary(summary_id="S1"))
    await remote_store.save(to_remote(make_summary(summary_id="R1")))

    report = await sync_service.sync(mock_user_id)

    assert report.pushed == 1
    assert report.failed == 0
    assert report.inserted == 1
    assert report.updated == 0


@pytest.mark.asyncio
async def test_sync_fetch_failure_is_bad_gateway(sync_service, remote_store, mock_user_id):
    remote_store.fail_fetch = True

    with pytest.raises(BadGatewayError):
        await sync_service.sync(mock_user_id)


# --- Best effort ---

@pytest.mark.asyncio
async def test_best_effort_success(sync_service, repository, make_summary, mock_user_id):
    summary = await repository.create(make_summary(summary_id="S1"))

    assert await sync_service.sync_summary_best_effort(summary) is True

    stored = await repository.get_for_user("S1", mock_user_id)
    assert stored.is_synced is True
    assert stored.remote_id == "S1"


@pytest.mark.asyncio
async def test_best_effort_failure_keeps_summary_unsynced(sync_service, repository, remote_store, make_summary):
    summary = await repository.create(make_summary(summary_id="S1"))
    remote_store.fail_save_for.add("S1")

    assert await sync_service.sync_summary_best_effort(summary) is False
    assert summary.is_synced is False


@pytest.mark.asyncio
async def test_best_effort_timeout(make_summary):
    async def slow_save(summary):
        await asyncio.sleep(1)
        return "doc-1"

    store = AsyncMock(spec=RemoteStore)
    store.save.side_effect = slow_save
    repository = AsyncMock(spec=SummaryRepository)
    service = SyncService(remote_store=store, repository=repository, timeout=0.01)
    summary = make_summary(summary_id="S1")

    assert await service.sync_summary_best_effort(summary) is False
    assert summary.is_synced is False
    repository.update.assert_not_called()


class SlowAckRemoteStore(InMemoryRemoteStore):
    """Stores the document, then stalls before acknowledging the first save."""

    def __init__(self, delay: float):
        super().__init__()
        self.delay = delay

    async def save(self, summary: RemoteSummary) -> str:
        remote_id = await super().save(summary)
        if self.delay:
            delay, self.delay = self.delay, 0
            await asyncio.sleep(delay)
        return remote_id


@pytest.mark.asyncio
async def test_timed_out_save_does_not_duplicate_or_resurrect(repository, make_summary, mock_user_id):
    store = SlowAckRemoteStore(delay=1)
    service = SyncService(remote_store=store, repository=repository, timeout=0.01)
    summary = await repository.create(make_summary(summary_id="S1"))

    assert await service.sync_summary_best_effort(summary) is False
    assert summary.remote_id is None
    assert list(store.documents) == ["S1"]

    assert await service.push_unsynced(mock_user_id) == (1, 0)
    assert list(store.documents) == ["S1"]

    stored = await repository.get_for_user("S1", mock_user_id)
    await service.delete_remote(stored)
    await repository.delete(stored)

    assert store.documents == {}
    assert await service.pull_remote(mock_user_id) == (0, 0)
    assert await repository.get_for_user("S1", mock_user_id) is None


# --- Delete ---

@pytest.mark.asyncio
async def test_delete_remote(sync_service, remote_store, make_summary):
    remote_id = await remote_store.save(to_remote(make_summary(summary_id="S1")))

    await sync_service.delete_remote(make_summary(summary_id="S1", remote_id=remote_id))
    assert remote_store.documents == {}


@pytest.mark.asyncio
async def test_delete_remote_without_remote_id_is_noop():
    store = AsyncMock(spec=RemoteStore)
    service = SyncService(remote_store=store, repository=AsyncMock(spec=SummaryRepository))

    await service.delete_remote(VideoSummaryModel(id="S1", remote_id=None))

    store.delete.assert_not_called()

"""
Cloud Firestore implementation of RemoteStore.
"""
from typing import Optional

from google.api_core import exceptions as google_exceptions
from google.cloud import firestore
from loguru import logger

from ytmate.core.providers.remote_store import RemoteStore, RemoteStoreError, RemoteSummary

# Firestore rejects batches with more than 500 writes
MAX_BATCH_SIZE = 500


class FirestoreRemoteStore(RemoteStore):
    """
    Firestore-backed remote store.

    All summaries live in a single collection and are scoped to their owner
    through the ``userId`` field. New documents are named after the summary
    id, which keeps retried saves idempotent.

    Example:
        client = firestore.AsyncClient(project="my-project")
        store = FirestoreRemoteStore(client, collection="summaries")
    """

    def __init__(self, client: firestore.AsyncClient, collection: str = "summaries"):
        self.client = client
        self.collection_name = collection

    @property
    def _collection(self):
        return self.client.collection(self.collection_name)

    async def save(self, summary: RemoteSummary) -> str:
        data = summary.to_document()
        doc_ref = self._collection.document(summary.remote_id or summary.id)
        try:
            await doc_ref.set(data, merge=True)
        except google_exceptions.GoogleAPICallError as e:
            raise RemoteStoreError("save", str(e)) from e

        logger.debug(f"Saved summary {summary.id} to Firestore as {doc_ref.id}")
        return doc_ref.id

    async def fetch_all(self, user_id: str) -> list[RemoteSummary]:
        query = (
            self._collection
            .where(filter=firestore.FieldFilter("userId", "==", user_id))
            .order_by("createdAt", direction=firestore.Query.DESCENDING)
        )
        try:
            docs = [doc async for doc in query.stream()]
        except google_exceptions.GoogleAPICallError as e:
            raise RemoteStoreError("fetch", str(e)) from e

        summaries = []
        for doc in docs:
            summary = RemoteSummary.from_document(doc.to_dict() or {}, doc.id)
            if summary is None:
                logger.warning(f"Skipping undecodable Firestore document {doc.id}")
                continue
            summaries.append(summary)
        return summaries

    async def fetch_one(self, summary_id: str, user_id: str) -> Optional[RemoteSummary]:
        query = (
            self._collection
            .where(filter=firestore.FieldFilter("id", "==", summary_id))
            .where(filter=firestore.FieldFilter("userId", "==", user_id))
            .limit(1)
        )
        try:
            docs = [doc async for doc in query.stream()]
        except google_exceptions.GoogleAPICallError as e:
            raise RemoteStoreError("fetch", str(e)) from e

        if not docs:
            return None
        return RemoteSummary.from_document(docs[0].to_dict() or {}, docs[0].id)

    async def delete(self, remote_id: str) -> None:
        try:
            await self._collection.document(remote_id).delete()
        except google_exceptions.GoogleAPICallError as e:
            raise RemoteStoreError("delete", str(e)) from e

    async def delete_many(self, remote_ids: list[str]) -> None:
        try:
            for start in range(0, len(remote_ids), MAX_BATCH_SIZE):
                batch = self.client.batch()
                for remote_id in remote_ids[start:start + MAX_BATCH_SIZE]:
                    batch.delete(self._collection.document(remote_id))
                await batch.commit()
        except google_exceptions.GoogleAPICallError as e:
            raise RemoteStoreError("delete", str(e)) from e

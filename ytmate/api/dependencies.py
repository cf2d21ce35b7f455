"""
Dependency injection factories for FastAPI.

This module provides factory functions for creating service instances
with proper dependency injection. Providers are selected based on config.
"""
from functools import lru_cache
from fastapi import Depends
from google.cloud import firestore
from sqlalchemy.ext.asyncio import AsyncSession

from ytmate.core.config import settings
from ytmate.core.db import get_db_session

# Repositories
from ytmate.repositories.summary import SummaryRepository

# Provider interfaces
from ytmate.core.providers.llm_provider import LLMProvider
from ytmate.core.providers.remote_store import RemoteStore

# Provider type enums
from ytmate.models.enums import LLMProviderType

# Concrete providers
from ytmate.core.providers.gemini_provider import GeminiProvider
from ytmate.core.providers.groq_provider import GroqProvider
from ytmate.core.providers.firestore_store import FirestoreRemoteStore

# Services
from ytmate.services.summarization import SummarizationService
from ytmate.services.summary import SummaryService
from ytmate.services.sync import SyncService
from ytmate.services.youtube import YouTubeService


# =============================================================================
# PROVIDER FACTORIES
# =============================================================================

@lru_cache
def get_summary_llm_provider() -> LLMProvider:
    """
    Get LLM provider for summarization.

    Default: Gemini (configured in settings.SUMMARY_LLM_PROVIDER)
    """
    provider_type = settings.SUMMARY_LLM_PROVIDER

    if provider_type == LLMProviderType.GEMINI:
        return GeminiProvider(
            api_key=settings.GEMINI_API_KEY,
            model_name=settings.GEMINI_MODEL_NAME,
        )
    elif provider_type == LLMProviderType.GROQ:
        return GroqProvider(
            api_key=settings.GROQ_API_KEY,
            model_name=settings.GROQ_MODEL_NAME,
        )
    else:
        raise ValueError(f"Unknown LLM provider: {provider_type}")


@lru_cache
def get_remote_store() -> RemoteStore:
    """Get the Firestore-backed remote summary store."""
    client = firestore.AsyncClient(
        project=settings.FIRESTORE_PROJECT_ID,
        database=settings.FIRESTORE_DATABASE,
    )
    return FirestoreRemoteStore(
        client=client,
        collection=settings.FIRESTORE_SUMMARIES_COLLECTION,
    )


# =============================================================================
# SERVICE FACTORIES
# =============================================================================

@lru_cache
def get_youtube_service() -> YouTubeService:
    """Get YouTube service for title and transcript lookup."""
    return YouTubeService(
        proxy_url=settings.YOUTUBE_PROXY_URL,
        fetch_transcripts=settings.FETCH_TRANSCRIPTS,
    )


def get_summary_repository(
    db: AsyncSession = Depends(get_db_session),
) -> SummaryRepository:
    """Get summary repository for the request's session."""
    return SummaryRepository(db)


def get_summarization_service(
    llm_provider: LLMProvider = Depends(get_summary_llm_provider),
) -> SummarizationService:
    """Get summarization service for structured video summaries."""
    return SummarizationService(llm_provider=llm_provider)


def get_sync_service(
    remote_store: RemoteStore = Depends(get_remote_store),
    repository: SummaryRepository = Depends(get_summary_repository),
) -> SyncService:
    """Get sync service for the remote mirror."""
    return SyncService(
        remote_store=remote_store,
        repository=repository,
        timeout=settings.REMOTE_SYNC_TIMEOUT_SECONDS,
    )


def get_summary_service(
    repository: SummaryRepository = Depends(get_summary_repository),
    youtube_service: YouTubeService = Depends(get_youtube_service),
    summarization_service: SummarizationService = Depends(get_summarization_service),
    sync_service: SyncService = Depends(get_sync_service),
) -> SummaryService:
    """
    Get summary service.

    Wires together:
    - SummaryRepository for local storage
    - YouTubeService for title and transcript lookup
    - SummarizationService for generation
    - SyncService for the remote mirror
    """
    return SummaryService(
        repository=repository,
        youtube_service=youtube_service,
        summarization_service=summarization_service,
        sync_service=sync_service,
    )

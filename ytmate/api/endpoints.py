"""
API endpoints for link recognition, summaries, sync and library search.
"""
from fastapi import APIRouter, Request, Depends, Query, Response
from typing import List, Optional
from loguru import logger
import time

from ytmate.models import SortOrder, ValidationResult, VibeCategory
from ytmate.models.api import (
    CategoryCount,
    DetectRequest,
    DetectResponse,
    SearchItem,
    SummarizeRequest,
    SummaryListItem,
    SummaryResponse,
    SummaryUpdateRequest,
    SyncReport,
)
from ytmate.services import url_parser
from ytmate.services.share import find_youtube_url
from ytmate.services.summary import SummaryService
from ytmate.services.sync import SyncService
from ytmate.api.dependencies import get_summary_service, get_sync_service
from ytmate.api.auth import current_active_user
from ytmate.models.sql import User
from ytmate.core.limiter import limiter
from ytmate.core.constants import PaginationConfig, RateLimitConfig, SummaryConfig


router = APIRouter()

_CATEGORY_ORDER = {category.value: index for index, category in enumerate(VibeCategory)}


# =============================================================================
# URL RECOGNITION
# =============================================================================

@router.get("/urls/validate", response_model=ValidationResult, tags=["urls"])
async def validate_url(url: str = Query(default="", max_length=2048)):
    """
    Validates a YouTube link and reports the first reason it is unusable.

    Args:
        url: The link to check.

    Returns:
        ValidationResult: Video ID, normalized URL and thumbnail, or an error message.
    """
    return url_parser.validate(url)


@router.post("/urls/detect", response_model=DetectResponse, tags=["urls"])
@limiter.limit(RateLimitConfig.DETECT)
async def detect_url(request: Request, payload: DetectRequest):
    """
    Finds the first YouTube video link in shared or pasted text.

    Rate limit: 60 requests per minute.

    Returns:
        DetectResponse: The link with its video and playlist IDs, or all nulls.
    """
    url = find_youtube_url(payload.text)
    if url is None:
        return DetectResponse()
    return DetectResponse(
        url=url,
        video_id=url_parser.extract_video_id(url),
        playlist_id=url_parser.extract_playlist_id(url),
    )


# =============================================================================
# SUMMARIES
# =============================================================================

@router.post("/summaries", response_model=SummaryResponse, status_code=201, tags=["summaries"])
@limiter.limit(RateLimitConfig.SUMMARIZE)
async def create_summary(
    request: Request,
    payload: SummarizeRequest,
    summary_service: SummaryService = Depends(get_summary_service),
    user: User = Depends(current_active_user),
):
    """
    Summarizes a YouTube video and stores the result in the user's library.

    Rate limit: 10 requests per minute.

    Args:
        request: FastAPI request object (required for rate limiting).
        payload: The request body containing the video URL and optional notes.
        summary_service: The service handling the business logic.
        user: The authenticated user.

    Returns:
        SummaryResponse: The stored summary with its action items.
    """
    logger.info(f"Incoming summary request for URL: {payload.url} from user {user.id}")

    start_time = time.perf_counter()
    summary = await summary_service.create_summary(user.id, payload.url, payload.user_notes)
    duration = time.perf_counter() - start_time
    logger.info(f"Summarization completed in {duration:.2f}s")
    return SummaryResponse.from_model(summary)


@router.get("/summaries", response_model=List[SummaryListItem], tags=["summaries"])
async def list_summaries(
    search: Optional[str] = Query(default=None, max_length=200),
    category: Optional[str] = Query(default=None, max_length=50),
    sort: SortOrder = Query(default=SortOrder.NEWEST),
    limit: int = Query(
        default=PaginationConfig.DEFAULT_LIMIT,
        ge=1,
        le=PaginationConfig.MAX_LIMIT,
        description=f"Max results (1-{PaginationConfig.MAX_LIMIT})",
    ),
    offset: int = Query(default=0, ge=0, description="Number of results to skip"),
    summary_service: SummaryService = Depends(get_summary_service),
    user: User = Depends(current_active_user),
):
    """
    Lists the user's library, optionally filtered by text and category.

    Returns:
        List[SummaryListItem]: Compact entries with a TL;DR snippet.
    """
    summaries = await summary_service.list_summaries(
        user.id, search=search, category=category, sort=sort, limit=limit, offset=offset
    )
    return [SummaryListItem.from_model(s, SummaryConfig.SNIPPET_LENGTH) for s in summaries]


@router.get("/summaries/categories", response_model=List[CategoryCount], tags=["summaries"])
async def get_category_counts(
    summary_service: SummaryService = Depends(get_summary_service),
    user: User = Depends(current_active_user),
):
    """
    Counts the user's summaries per vibe category, in category order.
    """
    counts = await summary_service.category_counts(user.id)
    ordered = sorted(counts.items(), key=lambda kv: (_CATEGORY_ORDER.get(kv[0], len(_CATEGORY_ORDER)), kv[0]))
    return [CategoryCount(category=category, count=count) for category, count in ordered]


@router.get("/summaries/{summary_id}", response_model=SummaryResponse, tags=["summaries"])
async def get_summary(
    summary_id: str,
    summary_service: SummaryService = Depends(get_summary_service),
    user: User = Depends(current_active_user),
):
    """
    Retrieves a summary with its action items.

    Raises:
        NotFoundError: If the summary does not exist or belongs to someone else.
    """
    summary = await summary_service.get_summary(summary_id, user.id)
    return SummaryResponse.from_model(summary)


@router.patch("/summaries/{summary_id}", response_model=SummaryResponse, tags=["summaries"])
async def update_summary(
    summary_id: str,
    payload: SummaryUpdateRequest,
    summary_service: SummaryService = Depends(get_summary_service),
    user: User = Depends(current_active_user),
):
    """
    Replaces the personal notes of a summary. The summary is queued for sync.
    """
    summary = await summary_service.update_notes(summary_id, user.id, payload.user_notes)
    return SummaryResponse.from_model(summary)


@router.delete("/summaries/{summary_id}", status_code=204, tags=["summaries"])
async def delete_summary(
    summary_id: str,
    summary_service: SummaryService = Depends(get_summary_service),
    user: User = Depends(current_active_user),
):
    """
    Deletes a summary locally and from the remote store.
    """
    logger.info(f"User {user.id} deleting summary {summary_id}")
    await summary_service.delete_summary(summary_id, user.id)
    return Response(status_code=204)


# =============================================================================
# SYNC & SEARCH
# =============================================================================

@router.post("/sync", response_model=SyncReport, tags=["sync"])
async def sync_library(
    sync_service: SyncService = Depends(get_sync_service),
    user: User = Depends(current_active_user),
):
    """
    Pushes unsynced summaries and imports newer remote ones.

    Returns:
        SyncReport: Counts of pushed, failed, inserted and updated summaries.
    """
    start_time = time.perf_counter()
    report = await sync_service.sync(user.id)
    logger.info(f"Sync for user {user.id} completed in {time.perf_counter() - start_time:.2f}s: {report}")
    return report


@router.get("/search", response_model=List[SearchItem], tags=["search"])
async def search_library(
    q: str = Query(default="", max_length=200),
    summary_service: SummaryService = Depends(get_summary_service),
    user: User = Depends(current_active_user),
):
    """
    Searches summaries and individual action items of the user's library.
    """
    return await summary_service.search(user.id, q)

"""
Library search index.

Every summary yields one searchable entry for itself and one per action
item, so a query can land directly on a single tip inside a video.
"""
from typing import Iterable, List, Optional, Tuple

from ytmate.core.constants import SearchConfig
from ytmate.models.api import SearchItem
from ytmate.models.sql import ActionItemModel, VideoSummaryModel


def item_identifier(summary_id: str, action_item_id: Optional[str] = None) -> str:
    """Identifier of a search entry: the summary ID, or ``<summaryId>_<actionItemId>``."""
    if action_item_id is None:
        return summary_id
    return f"{summary_id}_{action_item_id}"


def parse_item_identifier(identifier: str) -> Tuple[str, Optional[str]]:
    """
    Split a search entry identifier into its summary and action item IDs.

    UUIDs never contain ``_``, so the last one separates the two parts.

    Returns:
        (summary_id, action_item_id), with action_item_id None for summary entries.
    """
    summary_id, sep, action_item_id = identifier.rpartition("_")
    if not sep or not summary_id or not action_item_id:
        return identifier, None
    return summary_id, action_item_id


def search_keywords(summary: VideoSummaryModel) -> List[str]:
    return [summary.vibe_category, summary.difficulty_level] + [
        item.headline for item in summary.action_items
    ]


def searchable_text(summary: VideoSummaryModel) -> str:
    """Title (when known), TL;DR and every action item headline, space separated."""
    text = summary.tldr
    if summary.video_title:
        text = f"{summary.video_title} {text}"
    headlines = " ".join(item.headline for item in summary.action_items)
    return f"{text} {headlines}"


def _summary_item(summary: VideoSummaryModel) -> SearchItem:
    return SearchItem(
        id=item_identifier(summary.id),
        domain=SearchConfig.DOMAIN_IDENTIFIER,
        summary_id=summary.id,
        title=summary.video_title or SearchConfig.DEFAULT_SUMMARY_TITLE,
        description=summary.tldr,
        keywords=search_keywords(summary),
        subject=summary.vibe_category,
        thumbnail_url=summary.thumbnail_url,
        related_url=summary.video_url,
        created_at=summary.created_at,
        updated_at=summary.updated_at,
    )


def _action_item(summary: VideoSummaryModel, item: ActionItemModel) -> SearchItem:
    return SearchItem(
        id=item_identifier(summary.id, item.id),
        domain=SearchConfig.DOMAIN_IDENTIFIER,
        summary_id=summary.id,
        action_item_id=item.id,
        title=f"{item.emoji} {item.headline}",
        description=item.detail,
        keywords=[item.headline, summary.vibe_category, summary.difficulty_level],
        group=summary.video_title,
        thumbnail_url=summary.thumbnail_url,
        related_url=item.url_with_timestamp(summary.video_url),
        timestamp_seconds=item.timestamp_seconds,
    )


def build_search_items(summary: VideoSummaryModel) -> List[SearchItem]:
    """
    Build the search entries of one summary.

    Args:
        summary: The summary, with action items loaded.

    Returns:
        The summary entry followed by one entry per action item, in display order.
    """
    items = [_summary_item(summary)]
    for action in sorted(summary.action_items, key=lambda a: a.order_index):
        items.append(_action_item(summary, action))
    return items


def _matches(item: SearchItem, needle: str) -> bool:
    haystack = [item.title, item.description, *item.keywords]
    return any(needle in field.lower() for field in haystack if field)


def search(summaries: Iterable[VideoSummaryModel], query: str) -> List[SearchItem]:
    """
    Case-insensitive search over the entries of the given summaries.

    An empty query matches nothing.
    """
    needle = query.strip().lower()
    if not needle:
        return []

    results = []
    for summary in summaries:
        results.extend(item for item in build_search_items(summary) if _matches(item, needle))
    return results

"""
Structured summarization of a single YouTube video.

This module provides the SummarizationService class, which asks the
configured LLM provider for a JSON summary (TL;DR, difficulty, vibe category
and timestamped action items) and validates the answer.
"""
import json
import re
from typing import Optional

from loguru import logger
from pydantic import ValidationError

from ytmate.core.constants import SummaryConfig
from ytmate.core.prompts import SummaryPrompts
from ytmate.core.providers.llm_provider import (
    LLMContentAccessError,
    LLMMessage,
    LLMProvider,
    LLMRateLimitError,
)
from ytmate.models import GeneratedSummary, LLMRole, Video


class SummaryGenerationError(Exception):
    """Base class for summarization failures. ``message`` is safe to show to users."""

    message = "Could not summarize this video. Please try again."

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class EmptyResponseError(SummaryGenerationError):
    message = "Received empty response from AI. Please try again."


class InvalidSummaryJSONError(SummaryGenerationError):
    message = "Failed to parse AI response. Please try again."


class VideoNotAccessibleError(SummaryGenerationError):
    message = "Cannot access this video. It may be private or age-restricted."


class QuotaExceededError(SummaryGenerationError):
    message = "API quota exceeded. Please try again later."


class LLMAPIError(SummaryGenerationError):
    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"AI Error: {detail}")


_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL | re.IGNORECASE)

_QUOTA_MARKERS = ("quota", "rate limit", "resource exhausted", "resource_exhausted", "429")
_ACCESS_MARKERS = ("private", "age-restricted", "age restricted", "permission", "not accessible", "unavailable")


def strip_code_fences(text: str) -> str:
    """Remove an optional surrounding markdown code fence."""
    stripped = text.strip()
    match = _FENCE_RE.match(stripped)
    return match.group(1) if match else stripped


def map_provider_error(error: Exception) -> SummaryGenerationError:
    """
    Translate a provider failure into a SummaryGenerationError.

    Typed provider errors are mapped directly. Anything else is classified
    by its message, falling back to LLMAPIError.
    """
    if isinstance(error, SummaryGenerationError):
        return error
    if isinstance(error, LLMRateLimitError):
        return QuotaExceededError()
    if isinstance(error, LLMContentAccessError):
        return VideoNotAccessibleError()

    text = str(error).lower()
    if any(marker in text for marker in _QUOTA_MARKERS):
        return QuotaExceededError()
    if any(marker in text for marker in _ACCESS_MARKERS):
        return VideoNotAccessibleError()
    return LLMAPIError(str(error) or type(error).__name__)


def parse_summary(content: str) -> GeneratedSummary:
    """
    Parse the model's JSON answer.

    Args:
        content: Raw model output, optionally wrapped in a code fence.

    Returns:
        GeneratedSummary with category and difficulty normalized and at most
        ``SummaryConfig.MAX_ACTION_ITEMS`` action items.

    Raises:
        EmptyResponseError: Blank output.
        InvalidSummaryJSONError: Output is not JSON or does not match the schema.
    """
    if not content or not content.strip():
        raise EmptyResponseError()

    try:
        data = json.loads(strip_code_fences(content))
    except json.JSONDecodeError as e:
        logger.warning(f"Model returned invalid JSON: {e}")
        raise InvalidSummaryJSONError() from e

    if not isinstance(data, dict):
        raise InvalidSummaryJSONError()

    try:
        summary = GeneratedSummary.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Model output does not match the summary schema: {e.error_count()} errors")
        raise InvalidSummaryJSONError() from e

    count = len(summary.action_items)
    if count > SummaryConfig.MAX_ACTION_ITEMS:
        logger.info(f"Trimming {count} action items to {SummaryConfig.MAX_ACTION_ITEMS}")
        summary = summary.model_copy(
            update={"action_items": summary.action_items[:SummaryConfig.MAX_ACTION_ITEMS]}
        )
    elif count < SummaryConfig.MIN_ACTION_ITEMS:
        logger.warning(f"Model returned only {count} action items")

    return summary


class SummarizationService:
    """
    Single-video summarization with a fixed JSON contract.

    Generation runs at low temperature with JSON output enforced where the
    provider supports it.
    """

    def __init__(self, llm_provider: LLMProvider):
        """
        Initialize the summarization service.

        Args:
            llm_provider: LLM provider for text generation.
        """
        self.llm_provider = llm_provider

    def build_messages(self, video: Video) -> list[LLMMessage]:
        title_block = SummaryPrompts.TITLE_BLOCK.format(title=video.title) if video.title else ""

        transcript_block = ""
        transcript = video.timestamped_text
        if transcript:
            if len(transcript) > SummaryConfig.MAX_TRANSCRIPT_CHARS:
                transcript = transcript[:SummaryConfig.MAX_TRANSCRIPT_CHARS] + "\n... (truncated)"
            transcript_block = SummaryPrompts.TRANSCRIPT_BLOCK.format(transcript=transcript)

        return [
            LLMMessage(role=LLMRole.SYSTEM, content=SummaryPrompts.SYSTEM_INSTRUCTION),
            LLMMessage(
                role=LLMRole.USER,
                content=SummaryPrompts.USER_TEMPLATE.format(
                    url=video.url,
                    title_block=title_block,
                    transcript_block=transcript_block,
                    schema=SummaryPrompts.JSON_SCHEMA,
                ),
            ),
        ]

    async def summarize(self, video: Video) -> GeneratedSummary:
        """
        Generate a structured summary for a video.

        Args:
            video: The video, with title and transcript when they could be fetched.

        Returns:
            The validated GeneratedSummary.

        Raises:
            SummaryGenerationError: Any generation or parsing failure.
        """
        logger.info(
            f"Summarizing video {video.id} "
            f"({len(video.transcript)} transcript segments)"
        )

        try:
            response = await self.llm_provider.generate_text(
                messages=self.build_messages(video),
                temperature=SummaryConfig.TEMPERATURE,
                max_tokens=SummaryConfig.MAX_OUTPUT_TOKENS,
                json_output=True,
                top_p=SummaryConfig.TOP_P,
                top_k=SummaryConfig.TOP_K,
            )
        except SummaryGenerationError:
            raise
        except Exception as e:
            logger.error(f"Summary generation failed for {video.id}: {e}")
            raise map_provider_error(e) from e

        return parse_summary(response.content)

import json

import pytest
from unittest.mock import AsyncMock

from ytmate.services.summarization import (
    EmptyResponseError,
    InvalidSummaryJSONError,
    LLMAPIError,
    QuotaExceededError,
    SummarizationService,
    VideoNotAccessibleError,
    map_provider_error,
    parse_summary,
    strip_code_fences,
)
from ytmate.models import DifficultyLevel, LLMRole, VibeCategory, Video
from ytmate.core.constants import SummaryConfig
from ytmate.core.providers.llm_provider import (
    LLMContentAccessError,
    LLMProvider,
    LLMProviderError,
    LLMRateLimitError,
    LLMResponse,
)
from ytmate.core.prompts import SummaryPrompts


def _payload(item_count=5, **overrides):
    data = {
        "summary": "A talk about testing. It is short.",
        "difficulty_level": "Intermediate",
        "vibe_category": "Technical",
        "action_items": [
            {"emoji": "✅", "headline": f"Do thing {i}", "detail": f"Detail {i}", "timestamp": i * 30}
            for i in range(item_count)
        ],
    }
    data.update(overrides)
    return json.dumps(data)


@pytest.fixture
def mock_llm_provider():
    provider = AsyncMock(spec=LLMProvider)
    provider.generate_text.return_value = LLMResponse(content=_payload(), model="test-model")
    return provider


@pytest.fixture
def summarization_service(mock_llm_provider):
    return SummarizationService(llm_provider=mock_llm_provider)


@pytest.fixture
def sample_video():
    return Video(
        id="dQw4w9WgXcQ",
        title="Testing in Practice",
        url="https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        transcript=[{"text": "Hello world", "start": 12.5, "duration": 1}],
    )


# --- Parsing ---

def test_strip_code_fences():
    assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_code_fences('```\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_code_fences('  {"a": 1}  ') == '{"a": 1}'


def test_parse_summary_valid():
    summary = parse_summary(_payload(item_count=6))
    assert summary.difficulty_level == DifficultyLevel.INTERMEDIATE
    assert summary.vibe_category == VibeCategory.TECHNICAL
    assert [item.headline for item in summary.action_items][:2] == ["Do thing 0", "Do thing 1"]


def test_parse_summary_fenced():
    summary = parse_summary(f"```json\n{_payload()}\n```")
    assert len(summary.action_items) == 5


def test_parse_summary_trims_extra_action_items():
    summary = parse_summary(_payload(item_count=14))
    assert len(summary.action_items) == SummaryConfig.MAX_ACTION_ITEMS
    assert summary.action_items[-1].headline == "Do thing 9"


def test_parse_summary_keeps_short_lists():
    summary = parse_summary(_payload(item_count=2))
    assert len(summary.action_items) == 2


def test_parse_summary_normalizes_labels():
    summary = parse_summary(_payload(difficulty_level="hard", vibe_category="weird stuff"))
    assert summary.difficulty_level == DifficultyLevel.ADVANCED
    assert summary.vibe_category == VibeCategory.OTHER


@pytest.mark.parametrize("content", ["", "   \n"])
def test_parse_summary_empty(content):
    with pytest.raises(EmptyResponseError):
        parse_summary(content)


@pytest.mark.parametrize(
    "content",
    [
        "not json at all",
        "[1, 2, 3]",
        json.dumps({"difficulty_level": "Beginner"}),
        _payload(action_items=[{"emoji": "x"}]),
    ],
)
def test_parse_summary_invalid(content):
    with pytest.raises(InvalidSummaryJSONError) as exc_info:
        parse_summary(content)
    assert exc_info.value.message == "Failed to parse AI response. Please try again."


# --- Error mapping ---

@pytest.mark.parametrize(
    "error, expected",
    [
        (LLMRateLimitError("slow down"), QuotaExceededError),
        (LLMContentAccessError("no"), VideoNotAccessibleError),
        (LLMProviderError("429 Resource exhausted"), QuotaExceededError),
        (RuntimeError("This video is private"), VideoNotAccessibleError),
        (RuntimeError("socket closed"), LLMAPIError),
    ],
)
def test_map_provider_error(error, expected):
    assert isinstance(map_provider_error(error), expected)


def test_llm_api_error_message():
    mapped = map_provider_error(RuntimeError("socket closed"))
    assert mapped.message == "AI Error: socket closed"


# --- Service ---

def test_build_messages(summarization_service, sample_video):
    messages = summarization_service.build_messages(sample_video)

    assert len(messages) == 2
    assert messages[0].role == LLMRole.SYSTEM
    assert messages[0].content == SummaryPrompts.SYSTEM_INSTRUCTION
    assert messages[1].role == LLMRole.USER
    assert sample_video.url in messages[1].content
    assert "Testing in Practice" in messages[1].content
    assert "[12] Hello world" in messages[1].content


def test_build_messages_without_title_or_transcript(summarization_service):
    video = Video(id="dQw4w9WgXcQ", url="https://www.youtube.com/watch?v=dQw4w9WgXcQ")
    messages = summarization_service.build_messages(video)

    assert video.url in messages[1].content
    assert "[0]" not in messages[1].content


def test_build_messages_truncates_long_transcripts(summarization_service):
    segments = [
        {"text": "x" * 1000, "start": i, "duration": 1}
        for i in range(SummaryConfig.MAX_TRANSCRIPT_CHARS // 1000 + 10)
    ]
    video = Video(id="dQw4w9WgXcQ", url="https://www.youtube.com/watch?v=dQw4w9WgXcQ", transcript=segments)

    content = summarization_service.build_messages(video)[1].content
    assert "... (truncated)" in content
    assert len(content) < SummaryConfig.MAX_TRANSCRIPT_CHARS + 10_000


@pytest.mark.asyncio
async def test_summarize(summarization_service, sample_video):
    summary = await summarization_service.summarize(sample_video)

    assert summary.summary == "A talk about testing. It is short."
    assert len(summary.action_items) == 5

    _, kwargs = summarization_service.llm_provider.generate_text.call_args
    assert kwargs["json_output"] is True
    assert kwargs["temperature"] == SummaryConfig.TEMPERATURE
    assert kwargs["max_tokens"] == SummaryConfig.MAX_OUTPUT_TOKENS
    assert kwargs["top_p"] == SummaryConfig.TOP_P
    assert kwargs["top_k"] == SummaryConfig.TOP_K


@pytest.mark.asyncio
async def test_summarize_maps_provider_errors(summarization_service, sample_video):
    summarization_service.llm_provider.generate_text.side_effect = LLMRateLimitError("quota")

    with pytest.raises(QuotaExceededError) as exc_info:
        await summarization_service.summarize(sample_video)

    assert exc_info.value.message == "API quota exceeded. Please try again later."


@pytest.mark.asyncio
async def test_summarize_empty_response(summarization_service, sample_video):
    summarization_service.llm_provider.generate_text.return_value = LLMResponse(content="", model="m")

    with pytest.raises(EmptyResponseError):
        await summarization_service.summarize(sample_video)

"""
Structured summary returned by the generative model.

Field names mirror the JSON schema sent with the prompt.
"""
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ytmate.models.enums import DifficultyLevel, VibeCategory


class GeneratedActionItem(BaseModel):
    """A single actionable item: emoji, verb-first headline, detail and timestamp."""

    emoji: str
    headline: str
    detail: str
    timestamp: int = Field(ge=0)

    model_config = ConfigDict(extra="ignore", frozen=True)

    @field_validator("timestamp", mode="before")
    @classmethod
    def coerce_timestamp(cls, v):
        # Models occasionally return "125" or 125.0
        if isinstance(v, str) and v.strip().isdigit():
            return int(v.strip())
        if isinstance(v, float):
            return int(v)
        return v


class GeneratedSummary(BaseModel):
    """Model output: TL;DR, difficulty, vibe category and action items."""

    summary: str
    difficulty_level: DifficultyLevel
    vibe_category: VibeCategory
    action_items: List[GeneratedActionItem] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore", frozen=True)

    @field_validator("difficulty_level", mode="before")
    @classmethod
    def normalize_difficulty(cls, v):
        if isinstance(v, str):
            return DifficultyLevel.from_string(v)
        return v

    @field_validator("vibe_category", mode="before")
    @classmethod
    def normalize_category(cls, v):
        if isinstance(v, str):
            return VibeCategory.from_string(v)
        return v

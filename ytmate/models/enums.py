"""
Enums for type-safe values across the application.
"""
from enum import Enum


class LLMRole(str, Enum):
    """Role for LLM provider messages (OpenAI/Gemini/Groq compatible)."""
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class LLMProviderType(str, Enum):
    """Supported LLM provider types for configuration."""
    GEMINI = "gemini"
    GROQ = "groq"


class SortOrder(str, Enum):
    """Library ordering."""
    NEWEST = "newest"
    OLDEST = "oldest"
    ALPHABETICAL = "alphabetical"


class VibeCategory(str, Enum):
    """Content 'vibe' used to auto-sort summaries."""
    TECHNICAL = "Technical"
    MOTIVATIONAL = "Motivational"
    EDUCATIONAL = "Educational"
    TUTORIAL = "Tutorial"
    ENTERTAINMENT = "Entertainment"
    NEWS = "News"
    SATIRE = "Satire"
    REVIEW = "Review"
    VLOG = "Vlog"
    INTERVIEW = "Interview"
    DOCUMENTARY = "Documentary"
    HOW_TO = "How-To"
    OTHER = "Other"

    @classmethod
    def from_string(cls, value: str) -> "VibeCategory":
        """
        Map a free-form category label to a known category.

        Tries an exact match, then a case-insensitive match, then common
        fragments of each category. Falls back to OTHER.
        """
        try:
            return cls(value)
        except ValueError:
            pass

        lowered = value.strip().lower()
        for category in cls:
            if category.value.lower() == lowered:
                return category

        # First fragment hit wins.
        fragments = (
            (("tech",), cls.TECHNICAL),
            (("motiv", "inspir"), cls.MOTIVATIONAL),
            (("edu", "learn"), cls.EDUCATIONAL),
            (("tutor",), cls.TUTORIAL),
            (("entertain", "fun"), cls.ENTERTAINMENT),
            (("news",), cls.NEWS),
            (("satire", "comedy"), cls.SATIRE),
            (("review",), cls.REVIEW),
            (("vlog",), cls.VLOG),
            (("interview",), cls.INTERVIEW),
            (("doc",), cls.DOCUMENTARY),
            (("how",), cls.HOW_TO),
        )
        for keys, category in fragments:
            if any(key in lowered for key in keys):
                return category

        return cls.OTHER


class DifficultyLevel(str, Enum):
    """Expertise needed to benefit from the content."""
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"
    EXPERT = "Expert"

    @classmethod
    def from_string(cls, value: str) -> "DifficultyLevel":
        """Map a free-form difficulty label to a level, defaulting to INTERMEDIATE."""
        try:
            return cls(value)
        except ValueError:
            pass

        lowered = value.strip().lower()
        if any(key in lowered for key in ("begin", "easy", "intro")):
            return cls.BEGINNER
        if any(key in lowered for key in ("inter", "medium")):
            return cls.INTERMEDIATE
        if any(key in lowered for key in ("adv", "hard")):
            return cls.ADVANCED
        if any(key in lowered for key in ("expert", "pro")):
            return cls.EXPERT

        return cls.INTERMEDIATE

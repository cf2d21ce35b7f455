"""
Abstract base class for LLM providers.

This module defines a vendor-neutral interface for interacting with
Large Language Models. Concrete implementations (Gemini, Groq) must
implement this interface and translate vendor errors into the
LLMProviderError family below.
"""
from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel, ConfigDict

from ytmate.models.enums import LLMRole


class LLMMessage(BaseModel):
    """Vendor-neutral message format for LLM conversations."""

    role: LLMRole
    content: str

    model_config = ConfigDict(frozen=True)


class LLMResponse(BaseModel):
    """Standardized response from an LLM provider."""

    content: str
    model: str
    usage: Optional[dict[str, int]] = None

    model_config = ConfigDict(frozen=True)


class LLMProviderError(Exception):
    """Any failure reported by the LLM vendor."""


class LLMRateLimitError(LLMProviderError):
    """Quota or rate limit exhausted on the vendor side."""


class LLMContentAccessError(LLMProviderError):
    """The vendor could not access the referenced content (private, restricted, missing)."""


class LLMProvider(ABC):
    """
    Abstract interface for LLM providers.

    Example:
        provider = GeminiProvider(api_key="...", model_name="gemini-2.0-flash")
        response = await provider.generate_text(
            [
                LLMMessage(role=LLMRole.SYSTEM, content="Reply in JSON."),
                LLMMessage(role=LLMRole.USER, content="Summarize ..."),
            ],
            json_output=True,
        )
        print(response.content)
    """

    model_name: str

    @abstractmethod
    async def generate_text(
        self,
        messages: list[LLMMessage],
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
        json_output: bool = False,
        top_p: Optional[float] = None,
        top_k: Optional[int] = None,
    ) -> LLMResponse:
        """
        Generate text completion from messages.

        Args:
            messages: List of conversation messages.
            temperature: Sampling temperature (0.0-1.0).
            max_tokens: Maximum tokens to generate (None for model default).
            json_output: Ask the vendor to constrain output to a JSON object.
            top_p: Nucleus sampling cutoff (None for model default).
            top_k: Top-k sampling cutoff, ignored by vendors without it.

        Returns:
            LLMResponse containing generated content and metadata.

        Raises:
            LLMRateLimitError: Quota exhausted.
            LLMContentAccessError: Referenced content not accessible.
            LLMProviderError: Any other vendor failure.
        """
        ...

"""
Google Gemini implementation of LLMProvider.

This module provides a vendor-specific implementation for the Gemini API
while conforming to the LLMProvider interface.
"""
from typing import Optional

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions
from loguru import logger

from ytmate.core.providers.llm_provider import (
    LLMContentAccessError,
    LLMMessage,
    LLMProvider,
    LLMProviderError,
    LLMRateLimitError,
    LLMResponse,
)
from ytmate.models.enums import LLMRole


class GeminiProvider(LLMProvider):
    """
    Google Gemini implementation of LLMProvider.

    Uses the google-generativeai SDK for async text generation.

    Example:
        provider = GeminiProvider(
            api_key="your-api-key",
            model_name="gemini-2.0-flash",
        )
        response = await provider.generate_text(messages, json_output=True)
    """

    def __init__(self, api_key: str, model_name: str = "gemini-2.0-flash"):
        """
        Initialize the Gemini provider.

        Args:
            api_key: Google AI API key.
            model_name: Gemini model to use (e.g., "gemini-2.0-flash").
        """
        genai.configure(api_key=api_key)
        self.model_name = model_name
        self._model = genai.GenerativeModel(model_name)

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
        Generate text completion using Gemini.

        Gemini uses a single prompt format, so messages are converted
        to a structured text prompt.
        """
        prompt = self._format_messages(messages)

        config = genai.GenerationConfig(
            temperature=temperature,
            max_output_tokens=max_tokens,
            top_p=top_p,
            top_k=top_k,
            response_mime_type="application/json" if json_output else None,
        )

        logger.debug(f"Sending request to Gemini ({self.model_name})")
        try:
            response = await self._model.generate_content_async(
                prompt,
                generation_config=config,
            )
        except google_exceptions.ResourceExhausted as e:
            raise LLMRateLimitError(str(e)) from e
        except (google_exceptions.PermissionDenied, google_exceptions.NotFound) as e:
            raise LLMContentAccessError(str(e)) from e
        except google_exceptions.GoogleAPIError as e:
            raise LLMProviderError(str(e)) from e

        usage = None
        if response.usage_metadata:
            usage = {
                "prompt_tokens": response.usage_metadata.prompt_token_count,
                "completion_tokens": response.usage_metadata.candidates_token_count,
                "total_tokens": response.usage_metadata.total_token_count,
            }
            logger.debug(f"Gemini token usage: {usage}")

        try:
            content = response.text
        except ValueError:
            # Raised when the candidate was blocked or carries no text parts
            logger.warning(f"Gemini returned no text (feedback: {response.prompt_feedback})")
            content = ""

        return LLMResponse(
            content=content,
            model=self.model_name,
            usage=usage,
        )

    def _format_messages(self, messages: list[LLMMessage]) -> str:
        """
        Convert universal messages to Gemini prompt format.

        Since Gemini prefers a single prompt, we format messages
        with role labels for context.
        """
        parts = []
        for msg in messages:
            if msg.role == LLMRole.SYSTEM:
                parts.append(f"System Instructions: {msg.content}\n\n")
            elif msg.role == LLMRole.USER:
                parts.append(f"User: {msg.content}\n")
            elif msg.role == LLMRole.ASSISTANT:
                parts.append(f"Assistant: {msg.content}\n")
        return "".join(parts)

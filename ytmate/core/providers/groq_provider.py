"""
Groq (Llama) implementation of LLMProvider.

This module provides a vendor-specific implementation for the Groq API
(fast Llama inference) while conforming to the LLMProvider interface.
"""
from typing import Optional

import groq
from groq import AsyncGroq
from loguru import logger

from ytmate.core.providers.llm_provider import (
    LLMContentAccessError,
    LLMMessage,
    LLMProvider,
    LLMProviderError,
    LLMRateLimitError,
    LLMResponse,
)


class GroqProvider(LLMProvider):
    """
    Groq implementation of LLMProvider.

    Uses the Groq SDK for fast Llama model inference. Groq has no top-k
    sampling, so ``top_k`` is ignored.
    """

    def __init__(self, api_key: str, model_name: str = "llama-3.3-70b-versatile"):
        """
        Initialize the Groq provider.

        Args:
            api_key: Groq API key.
            model_name: Model to use (e.g., "llama-3.3-70b-versatile").
        """
        self.client = AsyncGroq(api_key=api_key)
        self.model_name = model_name

    async def generate_text(
        self,
        messages: list[LLMMessage],
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
        json_output: bool = False,
        top_p: Optional[float] = None,
        top_k: Optional[int] = None,
    ) -> LLMResponse:
        """Generate text completion using Groq."""
        # Convert to Groq message format (compatible with OpenAI format)
        groq_messages = [
            {"role": msg.role.value, "content": msg.content}
            for msg in messages
        ]

        kwargs: dict = {
            "model": self.model_name,
            "messages": groq_messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        if top_p is not None:
            kwargs["top_p"] = top_p
        if json_output:
            kwargs["response_format"] = {"type": "json_object"}

        logger.debug(f"Sending request to Groq ({self.model_name})")
        try:
            response = await self.client.chat.completions.create(**kwargs)
        except groq.RateLimitError as e:
            raise LLMRateLimitError(str(e)) from e
        except (groq.PermissionDeniedError, groq.NotFoundError) as e:
            raise LLMContentAccessError(str(e)) from e
        except groq.GroqError as e:
            raise LLMProviderError(str(e)) from e

        usage = None
        if response.usage:
            usage = {
                "prompt_tokens": response.usage.prompt_tokens,
                "completion_tokens": response.usage.completion_tokens,
                "total_tokens": response.usage.total_tokens,
            }
            logger.debug(f"Groq token usage: {usage}")

        return LLMResponse(
            content=response.choices[0].message.content or "",
            model=self.model_name,
            usage=usage,
        )

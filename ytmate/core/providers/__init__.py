"""
Provider abstraction layer for model-agnostic AI and storage integration.
"""
from ytmate.core.providers.llm_provider import (
    LLMProvider,
    LLMMessage,
    LLMResponse,
    LLMProviderError,
    LLMRateLimitError,
    LLMContentAccessError,
)
from ytmate.core.providers.remote_store import (
    RemoteStore,
    RemoteStoreError,
    RemoteSummary,
    RemoteActionItem,
)

__all__ = [
    # LLM
    "LLMProvider",
    "LLMMessage",
    "LLMResponse",
    "LLMProviderError",
    "LLMRateLimitError",
    "LLMContentAccessError",
    # Remote store
    "RemoteStore",
    "RemoteStoreError",
    "RemoteSummary",
    "RemoteActionItem",
]

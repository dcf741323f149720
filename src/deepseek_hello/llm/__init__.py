"""Completion client abstractions and the OpenAI-compatible adapter."""

from .base import LLMClient
from .errors import (
    LLMError,
    MalformedResponseError,
    MissingAPIKeyError,
    ProviderAPIError,
    ProviderRequestError,
    ProviderTimeoutError,
    ProviderTransportError,
)
from .factory import create_llm_client
from .openai_adapter import OpenAICompletionsAdapter
from .service import complete_prompt
from .types import CompletionRequest, CompletionResult

__all__ = [
    "CompletionRequest",
    "CompletionResult",
    "LLMClient",
    "LLMError",
    "MalformedResponseError",
    "MissingAPIKeyError",
    "OpenAICompletionsAdapter",
    "ProviderAPIError",
    "ProviderRequestError",
    "ProviderTimeoutError",
    "ProviderTransportError",
    "complete_prompt",
    "create_llm_client",
]

from __future__ import annotations

from abc import ABC, abstractmethod

from .types import CompletionRequest, CompletionResult


class LLMClient(ABC):
    @abstractmethod
    async def complete(self, request: CompletionRequest) -> CompletionResult:
        """Send one completion request and return the first choice."""

    async def close(self) -> None:
        """Release any network resources held by the client."""

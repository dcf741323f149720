from __future__ import annotations

from typing import Optional

import httpx

from deepseek_hello.config.settings import DemoSettings

from .base import LLMClient
from .factory import create_llm_client
from .types import CompletionRequest, CompletionResult


async def complete_prompt(
    request: CompletionRequest,
    settings: DemoSettings,
    client: LLMClient | None = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> CompletionResult:
    """Issue one completion request, closing the client if it was built here."""

    if client is not None:
        return await client.complete(request)

    llm_client = create_llm_client(settings, http_client=http_client)
    try:
        return await llm_client.complete(request)
    finally:
        await llm_client.close()

from __future__ import annotations

from typing import Optional
import logging

import httpx

from deepseek_hello.config.settings import DemoSettings

from .base import LLMClient
from .openai_adapter import OpenAICompletionsAdapter


def create_llm_client(
    settings: DemoSettings,
    *,
    http_client: Optional[httpx.AsyncClient] = None,
    logger: logging.Logger | None = None,
) -> LLMClient:
    return OpenAICompletionsAdapter(
        api_key=settings.api_key,
        base_url=settings.base_url,
        timeout_seconds=settings.timeout_seconds,
        http_client=http_client,
        logger=logger,
    )

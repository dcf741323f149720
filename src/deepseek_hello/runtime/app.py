from __future__ import annotations

from typing import Optional, TextIO
import logging

import httpx

from deepseek_hello.config.settings import DemoSettings
from deepseek_hello.llm import CompletionRequest, CompletionResult, LLMClient, complete_prompt


DEMO_PROMPT = "Hello! Can you tell me a short joke?"


def configure_logging(log_level: str) -> None:
    # basicConfig writes to stderr; stdout is reserved for the completion text.
    logging.basicConfig(
        level=getattr(logging, log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def build_request(settings: DemoSettings, prompt: str = DEMO_PROMPT) -> CompletionRequest:
    return CompletionRequest(
        prompt=prompt,
        model=settings.model,
        max_tokens=settings.max_tokens,
        temperature=settings.temperature,
    )


async def run_exchange(
    settings: DemoSettings,
    *,
    client: Optional[LLMClient] = None,
    http_client: Optional[httpx.AsyncClient] = None,
    logger: Optional[logging.Logger] = None,
) -> CompletionResult:
    """Send the demo prompt once and return the first completion choice."""

    _logger = logger or logging.getLogger("deepseek_hello.runtime")
    request = build_request(settings)
    _logger.info("completion_request_start model=%s base_url=%s", request.model, settings.base_url)
    return await complete_prompt(request, settings, client=client, http_client=http_client)


def report_success(result: CompletionResult, stream: TextIO) -> None:
    stream.write(result.text.strip() + "\n")
    stream.flush()


def report_failure(error: BaseException, stream: TextIO) -> None:
    stream.write(f"Error calling DeepSeek API: {error}\n")
    stream.flush()

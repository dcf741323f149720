from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Optional
import logging

import httpx
import openai
from openai import AsyncOpenAI

from deepseek_hello.observability import estimate_completion_cost_usd

from .base import LLMClient
from .errors import (
    MalformedResponseError,
    MissingAPIKeyError,
    ProviderAPIError,
    ProviderTimeoutError,
    ProviderTransportError,
)
from .types import CompletionRequest, CompletionResult


class OpenAICompletionsAdapter(LLMClient):
    """
    Adapter for the legacy /completions endpoint of OpenAI-compatible providers.

    The SDK client is created lazily on the first request and never retries:
    one call to complete() is exactly one HTTP POST.

    The adapter owns whatever it is given: close() closes the SDK client,
    whether injected through ``client`` or built here, and the SDK in turn
    closes an injected ``http_client``. Callers must not reuse either after
    close().
    """

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str,
        timeout_seconds: float,
        client: Any | None = None,
        client_factory: Callable[..., Any] | None = None,
        http_client: httpx.AsyncClient | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        if not api_key:
            raise MissingAPIKeyError("An API key is required to build the completions client.")
        self._api_key = api_key
        self._base_url = base_url
        self._timeout_seconds = timeout_seconds
        self._client = client
        self._client_factory = client_factory or AsyncOpenAI
        self._http_client = http_client
        self._logger = logger or logging.getLogger("deepseek_hello.llm.client")

    async def complete(self, request: CompletionRequest) -> CompletionResult:
        client = self._client or self._build_client()
        try:
            response = await client.completions.create(
                model=request.model,
                prompt=request.prompt,
                max_tokens=request.max_tokens,
                temperature=request.temperature,
            )
        except openai.APITimeoutError as exc:
            raise ProviderTimeoutError(
                f"Request to {self._base_url} timed out after {self._timeout_seconds:g}s."
            ) from exc
        except openai.APIConnectionError as exc:
            raise ProviderTransportError(
                f"Could not reach {self._base_url}: {_describe_connection_error(exc)}"
            ) from exc
        except openai.APIStatusError as exc:
            raise ProviderAPIError(
                f"HTTP {exc.status_code}: {_provider_message(exc)}",
                status_code=exc.status_code,
            ) from exc
        except (openai.APIResponseValidationError, ValueError) as exc:
            raise MalformedResponseError(
                f"Provider response from {self._base_url} could not be parsed: {exc}"
            ) from exc

        result = self._parse_response(response, request)
        self._logger.info(
            "llm_completion_success provider=deepseek model=%s finish_reason=%s input_tokens=%s output_tokens=%s cached_input_tokens=%s total_tokens=%s estimated_cost_usd=%s",
            result.model,
            result.finish_reason,
            result.input_tokens,
            result.output_tokens,
            result.cached_input_tokens,
            result.total_tokens,
            estimate_completion_cost_usd(
                model=result.model,
                input_tokens=result.input_tokens,
                output_tokens=result.output_tokens,
                cached_input_tokens=result.cached_input_tokens,
            ),
        )
        return result

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()

    def _build_client(self) -> Any:
        kwargs: dict[str, Any] = {
            "api_key": self._api_key,
            "base_url": self._base_url,
            "timeout": self._timeout_seconds,
            "max_retries": 0,
        }
        if self._http_client is not None:
            kwargs["http_client"] = self._http_client

        self._client = self._client_factory(**kwargs)
        self._logger.info(
            "llm_client_initialized base_url=%s timeout_seconds=%s",
            self._base_url,
            self._timeout_seconds,
        )
        return self._client

    @staticmethod
    def _parse_response(response: Any, request: CompletionRequest) -> CompletionResult:
        choices = getattr(response, "choices", None)
        if not choices:
            raise MalformedResponseError("Provider response contained no completion choices.")

        choice = choices[0]
        text = getattr(choice, "text", None)
        if not isinstance(text, str):
            raise MalformedResponseError("First completion choice has no text.")

        model = getattr(response, "model", None)
        if not isinstance(model, str) or not model.strip():
            model = request.model

        finish_reason = getattr(choice, "finish_reason", None)
        usage = getattr(response, "usage", None)
        return CompletionResult(
            text=text,
            model=model,
            finish_reason=finish_reason if isinstance(finish_reason, str) else None,
            input_tokens=getattr(usage, "prompt_tokens", None) if usage else None,
            output_tokens=getattr(usage, "completion_tokens", None) if usage else None,
            total_tokens=getattr(usage, "total_tokens", None) if usage else None,
            cached_input_tokens=getattr(usage, "prompt_cache_hit_tokens", None) if usage else None,
        )


def _provider_message(exc: openai.APIStatusError) -> str:
    body = exc.body
    if isinstance(body, Mapping):
        message = body.get("message")
        if isinstance(message, str) and message.strip():
            return message.strip()
    return exc.message


def _describe_connection_error(exc: openai.APIConnectionError) -> str:
    cause = exc.__cause__
    if cause is not None and str(cause):
        return f"{exc.message} ({cause})"
    return exc.message

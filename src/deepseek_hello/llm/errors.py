from __future__ import annotations

from typing import Optional


class LLMError(Exception):
    """Base error for LLM provider failures."""


class MissingAPIKeyError(LLMError):
    """Raised when a required API key env var is missing."""


class ProviderRequestError(LLMError):
    """Raised when the single completion request could not be completed."""


class ProviderTransportError(ProviderRequestError):
    """Raised when the provider could not be reached (DNS, refused connection)."""


class ProviderTimeoutError(ProviderTransportError):
    """Raised when the provider did not answer within the configured timeout."""


class ProviderAPIError(ProviderRequestError):
    """Raised when the provider answered with a non-success status."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(LLMError):
    """Raised when a response payload has no usable completion choice."""

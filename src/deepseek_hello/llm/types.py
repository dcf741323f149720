from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CompletionRequest:
    prompt: str
    model: str
    max_tokens: int = 100
    temperature: float = 1.0


@dataclass(frozen=True)
class CompletionResult:
    text: str
    model: str
    finish_reason: Optional[str] = None
    input_tokens: Optional[int] = None
    output_tokens: Optional[int] = None
    total_tokens: Optional[int] = None
    cached_input_tokens: Optional[int] = None

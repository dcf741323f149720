"""Token and cost metric helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class _Pricing:
    cache_hit_input_per_million_usd: float
    cache_miss_input_per_million_usd: float
    output_per_million_usd: float


# DeepSeek list prices; prompt tokens served from the context cache bill at the hit rate.
_MODEL_PRICING: tuple[tuple[str, _Pricing], ...] = (
    (
        "deepseek-chat",
        _Pricing(
            cache_hit_input_per_million_usd=0.07,
            cache_miss_input_per_million_usd=0.27,
            output_per_million_usd=1.10,
        ),
    ),
    (
        "deepseek-reasoner",
        _Pricing(
            cache_hit_input_per_million_usd=0.14,
            cache_miss_input_per_million_usd=0.55,
            output_per_million_usd=2.19,
        ),
    ),
)


def estimate_completion_cost_usd(
    *,
    model: str,
    input_tokens: Optional[int],
    output_tokens: Optional[int],
    cached_input_tokens: Optional[int] = None,
) -> Optional[float]:
    """Estimate the USD cost of one completion from its usage counters.

    ``cached_input_tokens`` is DeepSeek's ``prompt_cache_hit_tokens`` and is a
    subset of ``input_tokens``. Returns None when usage is missing or
    inconsistent, or the model has no known price.
    """

    if input_tokens is None or output_tokens is None:
        return None
    cached = cached_input_tokens or 0
    if input_tokens < 0 or output_tokens < 0 or cached < 0 or cached > input_tokens:
        return None

    pricing = _resolve_pricing(model)
    if pricing is None:
        return None

    cost = (
        (cached / 1_000_000.0) * pricing.cache_hit_input_per_million_usd
        + ((input_tokens - cached) / 1_000_000.0) * pricing.cache_miss_input_per_million_usd
        + (output_tokens / 1_000_000.0) * pricing.output_per_million_usd
    )
    return round(cost, 8)


def _resolve_pricing(model: str) -> Optional[_Pricing]:
    normalized = model.strip().lower()
    if not normalized:
        return None
    for prefix, pricing in _MODEL_PRICING:
        if normalized.startswith(prefix):
            return pricing
    return None

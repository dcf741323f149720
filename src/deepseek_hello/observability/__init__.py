from deepseek_hello.observability.metrics import estimate_completion_cost_usd

__all__ = ["estimate_completion_cost_usd"]

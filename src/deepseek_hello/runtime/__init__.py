"""Single-shot completion runtime."""

from deepseek_hello.runtime.app import (
    DEMO_PROMPT,
    build_request,
    configure_logging,
    report_failure,
    report_success,
    run_exchange,
)

__all__ = [
    "DEMO_PROMPT",
    "build_request",
    "configure_logging",
    "report_failure",
    "report_success",
    "run_exchange",
]

"""CLI for the one-shot DeepSeek completion demo."""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, Optional, Sequence, TextIO
import argparse
import asyncio
import json
import sys

import httpx

from deepseek_hello import __version__
from deepseek_hello.config.settings import (
    SettingsError,
    default_env_file,
    load_settings,
    settings_summary,
)
from deepseek_hello.llm import LLMError
from deepseek_hello.runtime.app import (
    configure_logging,
    report_failure,
    report_success,
    run_exchange,
)


EXIT_OK = 0
EXIT_REQUEST_FAILED = 1
EXIT_CONFIG_ERROR = 2
EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Send one completion request to DeepSeek and print the reply."
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        help="Path to a dotenv file. Defaults to ./.env when present. "
        "Process environment values win over file values.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to JSON config file. Environment variables override file values.",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Validate settings and print a redacted summary without calling the API.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"deepseek-hello {__version__}",
    )
    return parser


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
    http_client: Optional[httpx.AsyncClient] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    out = stdout or sys.stdout
    err = stderr or sys.stderr

    try:
        settings = load_settings(
            config_path=args.config,
            environ=environ,
            env_file=args.env_file or default_env_file(),
        )
    except SettingsError as exc:
        print(f"Configuration error: {exc}", file=err)
        return EXIT_CONFIG_ERROR

    if args.check:
        print(json.dumps(settings_summary(settings), indent=2, sort_keys=True), file=out)
        return EXIT_OK

    configure_logging(settings.log_level)

    try:
        result = asyncio.run(run_exchange(settings, http_client=http_client))
    except KeyboardInterrupt:
        print("Interrupted.", file=err)
        return EXIT_INTERRUPTED
    except LLMError as exc:
        report_failure(exc, err)
        return EXIT_REQUEST_FAILED

    report_success(result, out)
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())

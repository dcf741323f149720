"""Typed settings loader for deepseek-hello."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Mapping, Optional, Tuple
import json
import os

from dotenv import dotenv_values


_MISSING = object()
_VALID_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}

API_KEY_ENV = "OPENAI_API_KEY"
BASE_URL_ENV = "BASE_URL"
DEFAULT_BASE_URL = "https://api.deepseek.com/beta"
DEFAULT_MODEL = "deepseek-chat"
DEFAULT_ENV_FILE = Path(".env")


class SettingsError(ValueError):
    """Raised when settings cannot be loaded or validated."""


@dataclass(frozen=True)
class DemoSettings:
    api_key: str = field(repr=False)
    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL
    max_tokens: int = 100
    temperature: float = 1.0
    timeout_seconds: float = 30.0
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if not self.api_key.strip():
            raise SettingsError(f"{API_KEY_ENV} cannot be empty.")

        base_url = self.base_url.strip() if self.base_url else ""
        if not base_url:
            base_url = DEFAULT_BASE_URL
        if not base_url.startswith(("http://", "https://")):
            raise SettingsError(f"{BASE_URL_ENV} must be an http(s) URL, got {base_url!r}.")

        model = self.model.strip()
        if not model:
            raise SettingsError("model.name cannot be empty.")

        if self.max_tokens <= 0:
            raise SettingsError("model.max_tokens must be > 0.")

        if not 0.0 <= self.temperature <= 2.0:
            raise SettingsError("model.temperature must be between 0.0 and 2.0.")

        if self.timeout_seconds <= 0:
            raise SettingsError("model.timeout_seconds must be > 0.")

        log_level = self.log_level.strip().upper()
        if log_level not in _VALID_LOG_LEVELS:
            raise SettingsError(
                "runtime.log_level must be one of: " + ", ".join(sorted(_VALID_LOG_LEVELS))
            )

        object.__setattr__(self, "base_url", base_url.rstrip("/"))
        object.__setattr__(self, "model", model)
        object.__setattr__(self, "log_level", log_level)


def load_settings(
    config_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
    env_file: Optional[Path] = None,
) -> DemoSettings:
    """Load validated settings from an env file, JSON config and the environment.

    Precedence, highest first: process environment, env file, JSON config,
    defaults. The process environment is only read, never modified.
    """

    env = load_env_file(env_file)
    env.update(environ if environ is not None else os.environ)
    config = _load_config(config_path)

    api_key = resolve_env_secret(API_KEY_ENV, env)

    return DemoSettings(
        api_key=api_key,
        base_url=_read_value(
            config,
            env,
            section="model",
            key="base_url",
            env_key=BASE_URL_ENV,
            caster=_as_optional_str,
            default=None,
        )
        or DEFAULT_BASE_URL,
        model=_read_value(
            config,
            env,
            section="model",
            key="name",
            env_key="DEEPSEEK_HELLO_MODEL",
            caster=_as_str,
            default=DEFAULT_MODEL,
        ),
        max_tokens=_read_value(
            config,
            env,
            section="model",
            key="max_tokens",
            env_key="DEEPSEEK_HELLO_MAX_TOKENS",
            caster=_as_int,
            default=100,
        ),
        temperature=_read_value(
            config,
            env,
            section="model",
            key="temperature",
            env_key="DEEPSEEK_HELLO_TEMPERATURE",
            caster=_as_float,
            default=1.0,
        ),
        timeout_seconds=_read_value(
            config,
            env,
            section="model",
            key="timeout_seconds",
            env_key="DEEPSEEK_HELLO_TIMEOUT_SECONDS",
            caster=_as_float,
            default=30.0,
        ),
        log_level=_read_value(
            config,
            env,
            section="runtime",
            key="log_level",
            env_key="DEEPSEEK_HELLO_LOG_LEVEL",
            caster=_as_str,
            default="WARNING",
        ),
    )


def load_env_file(env_file: Optional[Path]) -> dict[str, str]:
    """Read KEY=VALUE pairs from a dotenv file without touching os.environ."""

    if env_file is None:
        return {}

    resolved = env_file.expanduser()
    if not resolved.is_file():
        raise SettingsError(f"Env file does not exist: {resolved}")

    try:
        values = dotenv_values(resolved, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SettingsError(f"Env file could not be read: {resolved} ({exc})") from exc

    return {key: value for key, value in values.items() if value is not None}


def default_env_file(cwd: Optional[Path] = None) -> Optional[Path]:
    """Return ./.env when present, mirroring dotenv's optional loading."""

    candidate = (cwd or Path.cwd()) / DEFAULT_ENV_FILE
    return candidate if candidate.is_file() else None


def resolve_env_secret(env_name: str, environ: Optional[Mapping[str, str]] = None) -> str:
    """Resolve a secret value from environment by indirection key."""

    env = environ if environ is not None else os.environ
    value = env.get(env_name)
    if value is None:
        raise SettingsError(f"Required secret environment variable '{env_name}' is not set.")

    if not value.strip():
        raise SettingsError(f"Secret environment variable '{env_name}' cannot be empty.")

    return value.strip()


def settings_summary(settings: DemoSettings) -> dict:
    """Render redacted settings for diagnostics."""

    return {
        "model": {
            "api_key": f"set ({len(settings.api_key)} chars)",
            "base_url": settings.base_url,
            "name": settings.model,
            "max_tokens": settings.max_tokens,
            "temperature": settings.temperature,
            "timeout_seconds": settings.timeout_seconds,
        },
        "runtime": {
            "log_level": settings.log_level,
        },
    }


def _load_config(config_path: Optional[Path]) -> Mapping[str, Any]:
    if config_path is None:
        return {}

    resolved = config_path.expanduser()
    if not resolved.exists():
        raise SettingsError(f"Config file does not exist: {resolved}")
    if not resolved.is_file():
        raise SettingsError(f"Config path is not a file: {resolved}")

    try:
        with resolved.open("r", encoding="utf-8") as handle:
            loaded = json.load(handle)
    except json.JSONDecodeError as exc:
        raise SettingsError(f"Config file is not valid JSON: {resolved}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise SettingsError(f"Config file could not be read: {resolved} ({exc})") from exc

    if not isinstance(loaded, dict):
        raise SettingsError("Config root must be an object.")

    return loaded


def _read_value(
    config: Mapping[str, Any],
    environ: Mapping[str, str],
    *,
    section: str,
    key: str,
    env_key: str,
    caster: Callable[[Any], Any],
    default: Any = _MISSING,
) -> Any:
    raw_value, source = _resolve_raw_value(
        config=config,
        environ=environ,
        section=section,
        key=key,
        env_key=env_key,
        default=default,
    )

    try:
        return caster(raw_value)
    except SettingsError as exc:
        raise SettingsError(f"Invalid value for {section}.{key} from {source}: {exc}") from exc
    except ValueError as exc:
        raise SettingsError(
            f"Invalid value for {section}.{key} from {source}: {raw_value!r}"
        ) from exc


def _resolve_raw_value(
    *,
    config: Mapping[str, Any],
    environ: Mapping[str, str],
    section: str,
    key: str,
    env_key: str,
    default: Any,
) -> Tuple[Any, str]:
    env_value = environ.get(env_key)
    if env_value not in (None, ""):
        return env_value, "environment"

    section_map = config.get(section)
    if section_map is not None and not isinstance(section_map, Mapping):
        raise SettingsError(f"Config section '{section}' must be an object.")

    if isinstance(section_map, Mapping) and key in section_map:
        return section_map[key], "config"

    if default is not _MISSING:
        return default, "default"

    raise SettingsError(
        f"Missing required setting '{section}.{key}'. "
        f"Provide it in config or via '{env_key}'."
    )


def _as_str(value: Any) -> str:
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise SettingsError("Value cannot be empty.")
        return text

    raise SettingsError("Expected string value.")


def _as_optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        text = value.strip()
        return text if text else None
    raise SettingsError("Expected string value.")


def _as_int(value: Any) -> int:
    if isinstance(value, bool):
        raise SettingsError("Boolean is not a valid integer value.")

    if isinstance(value, int):
        return value

    if isinstance(value, str):
        return int(value.strip())

    raise SettingsError("Expected integer value.")


def _as_float(value: Any) -> float:
    if isinstance(value, bool):
        raise SettingsError("Boolean is not a valid float value.")

    if isinstance(value, (int, float)):
        return float(value)

    if isinstance(value, str):
        return float(value.strip())

    raise SettingsError("Expected float value.")

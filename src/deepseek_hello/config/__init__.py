"""Configuration APIs."""

from deepseek_hello.config.settings import (
    API_KEY_ENV,
    BASE_URL_ENV,
    DEFAULT_BASE_URL,
    DEFAULT_MODEL,
    DemoSettings,
    SettingsError,
    default_env_file,
    load_env_file,
    load_settings,
    resolve_env_secret,
    settings_summary,
)

__all__ = [
    "API_KEY_ENV",
    "BASE_URL_ENV",
    "DEFAULT_BASE_URL",
    "DEFAULT_MODEL",
    "DemoSettings",
    "SettingsError",
    "default_env_file",
    "load_env_file",
    "load_settings",
    "resolve_env_secret",
    "settings_summary",
]

from __future__ import annotations

import json
from pathlib import Path
import sys
import tempfile
import unittest
from unittest.mock import patch

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from deepseek_hello.config.settings import (
    DEFAULT_BASE_URL,
    SettingsError,
    default_env_file,
    load_settings,
    resolve_env_secret,
    settings_summary,
)


class SettingsLoaderTests(unittest.TestCase):
    def test_loads_api_key_and_defaults_from_environment(self):
        settings = load_settings(environ={"OPENAI_API_KEY": "sk-test"})

        self.assertEqual(settings.api_key, "sk-test")
        self.assertEqual(settings.base_url, DEFAULT_BASE_URL)
        self.assertEqual(settings.model, "deepseek-chat")
        self.assertEqual(settings.max_tokens, 100)
        self.assertEqual(settings.temperature, 1.0)
        self.assertEqual(settings.timeout_seconds, 30.0)
        self.assertEqual(settings.log_level, "WARNING")

    def test_base_url_is_read_from_environment(self):
        settings = load_settings(
            environ={"OPENAI_API_KEY": "sk-test", "BASE_URL": "https://api.deepseek.com/beta/"}
        )
        self.assertEqual(settings.base_url, "https://api.deepseek.com/beta")

    def test_missing_api_key_names_the_variable(self):
        with self.assertRaises(SettingsError) as ctx:
            load_settings(environ={"BASE_URL": "https://api.deepseek.com/beta"})

        self.assertIn("OPENAI_API_KEY", str(ctx.exception))

    def test_blank_api_key_is_rejected(self):
        with self.assertRaises(SettingsError) as ctx:
            load_settings(environ={"OPENAI_API_KEY": "   "})

        self.assertIn("OPENAI_API_KEY", str(ctx.exception))

    def test_env_file_supplies_missing_values(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            env_path = Path(temp_dir) / ".env"
            env_path.write_text(
                "OPENAI_API_KEY=sk-from-file\nBASE_URL=https://example.test/v1\n",
                encoding="utf-8",
            )
            settings = load_settings(environ={}, env_file=env_path)

        self.assertEqual(settings.api_key, "sk-from-file")
        self.assertEqual(settings.base_url, "https://example.test/v1")

    def test_process_environment_wins_over_env_file(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            env_path = Path(temp_dir) / ".env"
            env_path.write_text("OPENAI_API_KEY=sk-from-file\n", encoding="utf-8")
            settings = load_settings(environ={"OPENAI_API_KEY": "sk-from-env"}, env_file=env_path)

        self.assertEqual(settings.api_key, "sk-from-env")

    def test_explicit_env_file_must_exist(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            with self.assertRaises(SettingsError):
                load_settings(
                    environ={"OPENAI_API_KEY": "sk-test"},
                    env_file=Path(temp_dir) / "missing.env",
                )

    def test_default_env_file_is_optional(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            self.assertIsNone(default_env_file(Path(temp_dir)))

            env_path = Path(temp_dir) / ".env"
            env_path.write_text("OPENAI_API_KEY=sk\n", encoding="utf-8")
            self.assertEqual(default_env_file(Path(temp_dir)), env_path)

    def test_environment_overrides_config_file(self):
        config = {
            "model": {"name": "deepseek-reasoner", "max_tokens": 64, "temperature": 0.2},
            "runtime": {"log_level": "info"},
        }

        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.json"
            config_path.write_text(json.dumps(config), encoding="utf-8")

            settings = load_settings(
                config_path=config_path,
                environ={"OPENAI_API_KEY": "sk-test", "DEEPSEEK_HELLO_MAX_TOKENS": "32"},
            )

        self.assertEqual(settings.model, "deepseek-reasoner")
        self.assertEqual(settings.max_tokens, 32)
        self.assertEqual(settings.temperature, 0.2)
        self.assertEqual(settings.log_level, "INFO")

    def test_invalid_integer_raises_settings_error(self):
        with self.assertRaises(SettingsError):
            load_settings(
                environ={"OPENAI_API_KEY": "sk-test", "DEEPSEEK_HELLO_MAX_TOKENS": "lots"}
            )

    def test_out_of_range_temperature_raises_settings_error(self):
        with self.assertRaises(SettingsError):
            load_settings(
                environ={"OPENAI_API_KEY": "sk-test", "DEEPSEEK_HELLO_TEMPERATURE": "2.5"}
            )

    def test_non_http_base_url_raises_settings_error(self):
        with self.assertRaises(SettingsError):
            load_settings(environ={"OPENAI_API_KEY": "sk-test", "BASE_URL": "api.deepseek.com"})

    def test_undecodable_env_file_raises_settings_error(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            env_path = Path(temp_dir) / ".env"
            env_path.write_bytes(b"OPENAI_API_KEY=\xff\xfe\n")

            with self.assertRaises(SettingsError) as ctx:
                load_settings(environ={}, env_file=env_path)

        self.assertIn("Env file could not be read", str(ctx.exception))

    def test_config_directory_raises_settings_error(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            with self.assertRaises(SettingsError) as ctx:
                load_settings(config_path=Path(temp_dir), environ={"OPENAI_API_KEY": "sk-test"})

        self.assertIn("not a file", str(ctx.exception))

    def test_unreadable_config_file_raises_settings_error(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.json"
            config_path.write_text("{}", encoding="utf-8")

            with patch.object(Path, "open", side_effect=PermissionError(13, "Permission denied")):
                with self.assertRaises(SettingsError) as ctx:
                    load_settings(config_path=config_path, environ={"OPENAI_API_KEY": "sk-test"})

        self.assertIn("could not be read", str(ctx.exception))

    def test_undecodable_config_file_raises_settings_error(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.json"
            config_path.write_bytes(b"{\"model\": \"\xff\"}")

            with self.assertRaises(SettingsError):
                load_settings(config_path=config_path, environ={"OPENAI_API_KEY": "sk-test"})

    def test_config_root_must_be_object(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.json"
            config_path.write_text("[]", encoding="utf-8")

            with self.assertRaises(SettingsError):
                load_settings(config_path=config_path, environ={"OPENAI_API_KEY": "sk-test"})

    def test_resolve_env_secret(self):
        secret = resolve_env_secret("OPENAI_API_KEY", {"OPENAI_API_KEY": "sk-test"})
        self.assertEqual(secret, "sk-test")

    def test_api_key_is_redacted(self):
        settings = load_settings(environ={"OPENAI_API_KEY": "sk-very-secret"})

        self.assertNotIn("sk-very-secret", repr(settings))
        self.assertNotIn("sk-very-secret", json.dumps(settings_summary(settings)))


if __name__ == "__main__":
    unittest.main()

from __future__ import annotations

import pytest

from ir_assistant.domain.errors import ConfigError
from ir_assistant.infrastructure.config.settings import (
    DEFAULT_COMPLETION_BASE_URL,
    DEFAULT_COMPLETION_MODEL,
    load_settings,
)


def test_defaults_apply_when_only_api_key_is_set() -> None:
    settings = load_settings({"GROQ_API_KEY": "gsk-test"})

    assert settings.completion_api_key == "gsk-test"
    assert settings.completion_base_url == DEFAULT_COMPLETION_BASE_URL
    assert settings.completion_model == DEFAULT_COMPLETION_MODEL
    assert settings.completion_timeout == 30.0
    assert settings.quote_timeout == 10.0
    assert settings.port == 3000
    assert settings.cors_origins == ("*",)
    assert settings.log_level == "INFO"
    assert settings.log_file is None
    assert settings.langfuse_enabled is False


def test_environment_overrides_are_parsed() -> None:
    settings = load_settings(
        {
            "GROQ_API_KEY": "gsk-test",
            "COMPLETION_MODEL": "llama-3.3-70b-versatile",
            "COMPLETION_TIMEOUT": "12.5",
            "QUOTE_TIMEOUT": "3",
            "PORT": "8080",
            "CORS_ORIGINS": "http://localhost:3000, https://ir.example.com",
            "LOG_LEVEL": "debug",
            "LANGFUSE_PUBLIC_KEY": "pk-lf-test",
        }
    )

    assert settings.completion_model == "llama-3.3-70b-versatile"
    assert settings.completion_timeout == 12.5
    assert settings.quote_timeout == 3.0
    assert settings.port == 8080
    assert settings.cors_origins == ("http://localhost:3000", "https://ir.example.com")
    assert settings.log_level == "DEBUG"
    assert settings.langfuse_enabled is True


def test_missing_api_key_is_rejected() -> None:
    with pytest.raises(ConfigError):
        load_settings({"GROQ_API_KEY": "   "})


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("COMPLETION_TIMEOUT", "soon"),
        ("QUOTE_TIMEOUT", "0"),
        ("PORT", "99999"),
        ("LOG_LEVEL", "LOUD"),
    ],
)
def test_invalid_values_are_rejected(name: str, value: str) -> None:
    with pytest.raises(ConfigError):
        load_settings({"GROQ_API_KEY": "gsk-test", name: value})


def test_reads_process_environment_by_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GROQ_API_KEY", "gsk-from-env")

    assert load_settings().completion_api_key == "gsk-from-env"

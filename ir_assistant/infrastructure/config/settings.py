"""
Runtime settings for the assistant, read from the process environment.

Callers load .env (python-dotenv) and bootstrap any secrets before calling
load_settings(); this module only reads and validates what is already there.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from ir_assistant.domain.errors import ConfigError

DEFAULT_COMPLETION_BASE_URL = "https://api.groq.com/openai/v1"
DEFAULT_COMPLETION_MODEL = "llama-3.1-8b-instant"
DEFAULT_QUOTE_BASE_URL = "https://query1.finance.yahoo.com"
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    """Assistant configuration settings."""

    # Completion backend
    completion_api_key: str
    completion_base_url: str = DEFAULT_COMPLETION_BASE_URL
    completion_model: str = DEFAULT_COMPLETION_MODEL
    completion_timeout: float = 30.0

    # Quote provider
    quote_base_url: str = DEFAULT_QUOTE_BASE_URL
    quote_timeout: float = 10.0

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: tuple[str, ...] = ("*",)

    # Logging and tracing
    log_level: str = "INFO"
    log_file: Optional[str] = None
    langfuse_enabled: bool = False


def _positive_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError(f"Configuration value is invalid: {name}") from exc
    if value <= 0:
        raise ConfigError(f"Configuration value must be positive: {name}")
    return value


def _port(env: Mapping[str, str]) -> int:
    raw = env.get("PORT", "3000")
    try:
        port = int(raw)
    except ValueError as exc:
        raise ConfigError("Configuration value is invalid: PORT") from exc
    if not 0 < port < 65536:
        raise ConfigError("Configuration value is invalid: PORT")
    return port


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from *environ* (defaults to os.environ).

    Raises:
        ConfigError: if GROQ_API_KEY is missing or a value cannot be parsed.
    """
    env = os.environ if environ is None else environ

    api_key = env.get("GROQ_API_KEY", "").strip()
    if not api_key:
        raise ConfigError("GROQ_API_KEY is not set")

    log_level = env.get("LOG_LEVEL", "INFO").strip().upper()
    if log_level not in _LOG_LEVELS:
        raise ConfigError("Configuration value is invalid: LOG_LEVEL")

    origins = tuple(
        origin.strip()
        for origin in env.get("CORS_ORIGINS", "*").split(",")
        if origin.strip()
    )

    return Settings(
        completion_api_key=api_key,
        completion_base_url=env.get("COMPLETION_BASE_URL") or DEFAULT_COMPLETION_BASE_URL,
        completion_model=env.get("COMPLETION_MODEL") or DEFAULT_COMPLETION_MODEL,
        completion_timeout=_positive_float(env, "COMPLETION_TIMEOUT", 30.0),
        quote_base_url=env.get("QUOTE_BASE_URL") or DEFAULT_QUOTE_BASE_URL,
        quote_timeout=_positive_float(env, "QUOTE_TIMEOUT", 10.0),
        host=env.get("HOST") or "0.0.0.0",
        port=_port(env),
        cors_origins=origins or ("*",),
        log_level=log_level,
        log_file=env.get("LOG_FILE") or None,
        langfuse_enabled=bool(env.get("LANGFUSE_PUBLIC_KEY")),
    )

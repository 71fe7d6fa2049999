"""Configuration values for the crisis assistant."""
from __future__ import annotations

import os
from dataclasses import dataclass, field


def _env_str(name: str, default: str) -> str:
    """Read a string environment variable with a non-empty fallback."""
    value = os.getenv(name)
    if value is None:
        return default
    value = value.strip()
    return value or default


def _env_int(name: str, default: int) -> int:
    """Read an integer environment variable with safe fallback."""
    raw = os.getenv(name)
    if raw is None:
        return default
    raw = raw.strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    """Read a float environment variable with safe fallback."""
    raw = os.getenv(name)
    if raw is None:
        return default
    raw = raw.strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    """Read a boolean flag; accepts 1/0, true/false, yes/no, on/off."""
    raw = os.getenv(name)
    if raw is None:
        return default
    raw = raw.strip().lower()
    if raw in {"1", "true", "yes", "on"}:
        return True
    if raw in {"0", "false", "no", "off"}:
        return False
    return default


@dataclass
class Settings:
    """Runtime settings loaded from environment variables."""

    # default_factory defers reads to instantiation so load_dotenv() values apply.
    api_base_url: str = field(default_factory=lambda: _env_str("API_BASE_URL", "http://localhost:3001/api/v1"))
    request_timeout_seconds: float = field(default_factory=lambda: _env_float("REQUEST_TIMEOUT_SECONDS", 30.0))
    chat_max_retries: int = field(default_factory=lambda: _env_int("CHAT_MAX_RETRIES", 2))
    chat_retry_backoff_seconds: float = field(default_factory=lambda: _env_float("CHAT_RETRY_BACKOFF_SECONDS", 1.0))
    chat_history_limit: int = field(default_factory=lambda: _env_int("CHAT_HISTORY_LIMIT", 20))
    enable_web_search: bool = field(default_factory=lambda: _env_bool("ENABLE_WEB_SEARCH", False))
    gemini_model_name: str = field(default_factory=lambda: _env_str("GEMINI_MODEL", "gemini-2.5-flash"))
    gemini_max_retries: int = field(default_factory=lambda: _env_int("GEMINI_MAX_RETRIES", 3))
    gemini_retry_wait_seconds: int = field(default_factory=lambda: _env_int("GEMINI_RETRY_WAIT_SECONDS", 60))
    gemini_temperature: float = field(default_factory=lambda: _env_float("GEMINI_TEMPERATURE", 0.7))
    gemini_max_output_tokens: int = field(default_factory=lambda: _env_int("GEMINI_MAX_OUTPUT_TOKENS", 500))
    log_level: str = field(default_factory=lambda: _env_str("LOG_LEVEL", "WARNING"))

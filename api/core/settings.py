"""
Environment-backed settings.

Values are read on every call so tests (and long-running dev servers with a
reloaded `.env`) pick up changes without re-importing modules.
"""

from __future__ import annotations

import os

DEFAULT_LLM_BASE_URL = "https://api.groq.com/openai/v1"
DEFAULT_LLM_MODEL = "llama-3.3-70b-versatile"
DEFAULT_CORS_ORIGINS = "http://localhost:3000"
DEFAULT_SESSION_SECRET = "dev-change-this-session-secret-0000"


def env_str(name: str, default: str = "") -> str:
    return os.environ.get(name, "").strip() or default


def env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    if raw in {"1", "true", "yes", "on"}:
        return True
    if raw in {"0", "false", "no", "off"}:
        return False
    return default


def db_pool_min_size() -> int:
    return max(1, env_int("DB_POOL_MIN_SIZE", 1))


def db_pool_max_size() -> int:
    return max(db_pool_min_size(), env_int("DB_POOL_MAX_SIZE", 5))


def db_auto_migrate() -> bool:
    return env_bool("DB_AUTO_MIGRATE", True)


def llm_base_url() -> str:
    return env_str("LLM_BASE_URL", DEFAULT_LLM_BASE_URL)


def llm_api_key() -> str:
    return env_str("GROQ_API_KEY")


def llm_model() -> str:
    return env_str("LLM_MODEL", DEFAULT_LLM_MODEL)


def llm_temperature() -> float:
    return env_float("LLM_TEMPERATURE", 0.4)


def llm_max_tokens() -> int:
    return env_int("LLM_MAX_TOKENS", 150)


def llm_timeout_s() -> float:
    return env_float("LLM_TIMEOUT_S", 60.0)


def chat_history_messages() -> int:
    return max(0, min(env_int("CHAT_HISTORY_MESSAGES", 10), 100))


def cors_origins() -> list[str]:
    raw = env_str("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def session_secret() -> str:
    # In production, set SESSION_SECRET in environment.
    return env_str("SESSION_SECRET", DEFAULT_SESSION_SECRET)


def session_ttl_hours() -> int:
    return max(1, env_int("SESSION_TTL_HOURS", 72))


def session_cookie_name() -> str:
    return env_str("SESSION_COOKIE_NAME", "copilot_session")


def log_level() -> str:
    return env_str("LOG_LEVEL", "INFO").upper()

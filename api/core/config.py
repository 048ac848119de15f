"""
Environment-driven settings.

Every value is read at call time so tests can monkeypatch the environment.
"""

from __future__ import annotations

import os

DEFAULT_WEBAPP_DIR = "./webapp"


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def pool_min_size() -> int:
    return max(_env_int("DB_POOL_MIN_SIZE", 1), 0)


def pool_max_size() -> int:
    return max(_env_int("DB_POOL_MAX_SIZE", 5), 1)


def command_timeout() -> int:
    return _env_int("DB_COMMAND_TIMEOUT", 30)


def webapp_dir() -> str:
    return os.environ.get("WEBAPP_DIR", DEFAULT_WEBAPP_DIR).strip() or DEFAULT_WEBAPP_DIR


def log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"

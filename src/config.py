"""Configuration and environment helpers for the project.

Provides small helpers to read typed environment variables and exposes
project-level configuration constants used across the codebase (cache
capacity and TTL, expiry sweep cadence, tool input limits, log level).
"""

from __future__ import annotations

import os


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


# Cache bounds
CACHE_MAX_SIZE = _env_int("CACHE_MAX_SIZE", 1024)
CACHE_TTL_SECONDS = _env_float("CACHE_TTL_SECONDS", 300.0)

# Background expiry sweep
CACHE_SWEEP_ENABLED = _env_bool("CACHE_SWEEP_ENABLED", True)
CACHE_SWEEP_INTERVAL = _env_float("CACHE_SWEEP_INTERVAL", 30.0)
CACHE_SWEEP_BATCH = _env_int("CACHE_SWEEP_BATCH", 256)

# Tool input limits
MAX_KEY_CHARS = _env_int("MAX_KEY_CHARS", 512)

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").strip().upper()

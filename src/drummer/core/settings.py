from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:8080"
DEFAULT_TIMEOUT_S = 15.0
DEFAULT_NOTIFY_MS = 5000
DEFAULT_LOG_LEVEL = "INFO"


def _read_number(env: Mapping[str, str], key: str, default, cast):
    raw = (env.get(key) or "").strip()
    if not raw:
        return default
    try:
        value = cast(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r, using %s", key, raw, default)
        return default
    if value <= 0:
        logger.warning("Ignoring non-positive %s=%r, using %s", key, raw, default)
        return default
    return value


@dataclass(frozen=True)
class Settings:
    api_url: str = DEFAULT_API_URL
    request_timeout_s: float = DEFAULT_TIMEOUT_S
    notification_ms: int = DEFAULT_NOTIFY_MS
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if env is None else env
        api_url = (env.get("DRUMMER_API_URL") or "").strip().rstrip("/") or DEFAULT_API_URL
        level = (env.get("DRUMMER_LOG_LEVEL") or "").strip().upper() or DEFAULT_LOG_LEVEL
        if level not in logging.getLevelNamesMapping():
            logger.warning("Unknown DRUMMER_LOG_LEVEL=%r, using %s", level, DEFAULT_LOG_LEVEL)
            level = DEFAULT_LOG_LEVEL

        return cls(
            api_url=api_url,
            request_timeout_s=_read_number(env, "DRUMMER_HTTP_TIMEOUT", DEFAULT_TIMEOUT_S, float),
            notification_ms=_read_number(env, "DRUMMER_NOTIFY_MS", DEFAULT_NOTIFY_MS, int),
            log_level=level,
        )

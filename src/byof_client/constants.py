"""Configuration defaults.

Defaults can be overridden through environment variables, read at call
time so tests and long-running processes pick up changes:

- ``BYOF_CHAT_TIMEOUT_MS``: chat request timeout
- ``BYOF_SAVE_TIMEOUT_MS``: save/load/list request timeout
- ``BYOF_HTTP_TRUST_ENV``: set to ``1`` to honor proxy environment variables
- ``BYOF_LOG_LEVEL``: default log level for the package loggers
"""

from __future__ import annotations

import os
from contextlib import suppress

CHAT_REQUEST_TIMEOUT_MS = 300_000
"""Chat request timeout (5 minutes); UI generation can be slow."""

SAVE_REQUEST_TIMEOUT_MS = 30_000
"""Save/load/list request timeout (30 seconds)."""

DEFAULT_LOG_LEVEL = "INFO"


def _env_timeout_ms(name: str, default: int) -> int:
    value = os.getenv(name)
    if value:
        with suppress(ValueError):
            parsed = int(value)
            if parsed > 0:
                return parsed
    return default


def chat_timeout_ms() -> int:
    """Resolve the chat request timeout in milliseconds."""
    return _env_timeout_ms("BYOF_CHAT_TIMEOUT_MS", CHAT_REQUEST_TIMEOUT_MS)


def save_timeout_ms() -> int:
    """Resolve the save/load/list request timeout in milliseconds."""
    return _env_timeout_ms("BYOF_SAVE_TIMEOUT_MS", SAVE_REQUEST_TIMEOUT_MS)


def trust_env_enabled() -> bool:
    """Use env proxy settings only when explicitly enabled."""
    return os.getenv("BYOF_HTTP_TRUST_ENV", "0") == "1"


def log_level_name() -> str:
    """Resolve the default log level name."""
    return os.getenv("BYOF_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()

"""
Telemetry - structured logging.
"""

from byof_client.telemetry.logger import (
    NOOP_LOGGER,
    ByofLogger,
    JsonFormatter,
    Logger,
    LogLevel,
    NoopLogger,
    SensitiveDataMasker,
    TextFormatter,
    get_logger,
)

__all__ = [
    "NOOP_LOGGER",
    "ByofLogger",
    "JsonFormatter",
    "LogLevel",
    "Logger",
    "NoopLogger",
    "SensitiveDataMasker",
    "TextFormatter",
    "get_logger",
]

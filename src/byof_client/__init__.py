"""byof-client: validated request layer for BYOF generation endpoints.

Sends a structured request to a remote generation service and returns a
validated, typed result under a bounded time budget with cooperative
cancellation.
"""
from __future__ import annotations

__version__ = "0.3.0"

from byof_client.chat import send_chat
from byof_client.client import CancelReason, CancelToken, combine_tokens
from byof_client.errors import ByofError, ByofErrorCode, is_cancellation
from byof_client.request import RequestDescriptor, RequestResult, execute
from byof_client.save import list_saved_uis, load_ui, save_ui
from byof_client.telemetry import NOOP_LOGGER, NoopLogger, get_logger
from byof_client.types import (
    ChatMessage,
    ChatResponse,
    ListResponse,
    LoadResponse,
    MessageRole,
    SaveResponse,
)

__all__ = [
    # Requests
    "RequestDescriptor",
    "RequestResult",
    "execute",
    "send_chat",
    "save_ui",
    "load_ui",
    "list_saved_uis",
    # Cancellation
    "CancelReason",
    "CancelToken",
    "combine_tokens",
    # Errors
    "ByofError",
    "ByofErrorCode",
    "is_cancellation",
    # Logging
    "NOOP_LOGGER",
    "NoopLogger",
    "get_logger",
    # Types
    "ChatMessage",
    "ChatResponse",
    "ListResponse",
    "LoadResponse",
    "MessageRole",
    "SaveResponse",
    # Version
    "__version__",
]

"""
Type definitions for byof-client.
"""

from byof_client.types.api import (
    ChatRequest,
    ChatResponse,
    ChatResponseModel,
    ListItem,
    ListRequest,
    ListResponse,
    LoadRequest,
    LoadResponse,
    SaveMeta,
    SaveRequest,
    SaveResponse,
    WireMessage,
    WireModel,
)
from byof_client.types.message import ChatMessage, MessageRole, StoredMessage

__all__ = [
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "ChatResponseModel",
    "ListItem",
    "ListRequest",
    "ListResponse",
    "LoadRequest",
    "LoadResponse",
    "MessageRole",
    "SaveMeta",
    "SaveRequest",
    "SaveResponse",
    "StoredMessage",
    "WireMessage",
    "WireModel",
]

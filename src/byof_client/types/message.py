"""
Chat message format shared by chat and save/load requests.
"""

from __future__ import annotations

import time
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class MessageRole(str, Enum):
    """Message role enumeration."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


def _now_ms() -> int:
    return int(time.time() * 1000)


class ChatMessage(BaseModel):
    """A single chat message.

    Attributes:
        role: Message role
        content: Message text
        ts: Unix timestamp in milliseconds (defaults to now)
    """

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    role: MessageRole
    content: str
    ts: int | float = Field(default_factory=_now_ms)

    @classmethod
    def user(cls, content: str, ts: int | float | None = None) -> ChatMessage:
        """Create a user message."""
        if ts is None:
            return cls(role=MessageRole.USER, content=content)
        return cls(role=MessageRole.USER, content=content, ts=ts)

    @classmethod
    def assistant(cls, content: str, ts: int | float | None = None) -> ChatMessage:
        """Create an assistant message."""
        if ts is None:
            return cls(role=MessageRole.ASSISTANT, content=content)
        return cls(role=MessageRole.ASSISTANT, content=content, ts=ts)

    def to_wire(self) -> dict[str, str]:
        """Role and content only; timestamps are not sent to the chat endpoint."""
        return {"role": str(self.role), "content": self.content}


class StoredMessage(ChatMessage):
    """A message read back from the save endpoint.

    The timestamp was recorded when the message was saved, so it is
    required here rather than defaulted.
    """

    ts: int | float

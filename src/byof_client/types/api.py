"""
Request and response payloads for the chat and save endpoints.

Field names are snake_case in Python and camelCase on the wire. Optional
response fields accept both an absent key and an explicit ``null``.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import to_jsonable_python

from byof_client.types.message import ChatMessage, MessageRole, StoredMessage


class WireModel(BaseModel):
    """Base for wire payloads."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    # Caller-owned structures copied to the wire as-is.
    _verbatim_fields: ClassVar[tuple[str, ...]] = ()

    def to_wire(self) -> dict[str, Any]:
        """Serialize with camelCase keys, dropping optional fields left as None."""
        data = self.model_dump(by_alias=True, exclude_none=True, mode="json")
        for name in self._verbatim_fields:
            value = getattr(self, name)
            if value is not None:
                data[to_camel(name)] = to_jsonable_python(value)
        return data


# Chat


class WireMessage(WireModel):
    """Message as sent to the chat endpoint (no timestamp)."""

    role: MessageRole
    content: str


class ChatRequest(WireModel):
    """Request payload sent to the chat endpoint.

    ``messages`` accepts ``ChatMessage`` instances or plain dicts; either way
    only role and content are sent.
    """

    _verbatim_fields: ClassVar[tuple[str, ...]] = ("context",)

    messages: list[WireMessage]
    system_prompt: str
    api_spec: str | None = None
    context: dict[str, Any] | None = None

    @field_validator("messages", mode="before")
    @classmethod
    def strip_timestamps(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return [m.to_wire() if isinstance(m, ChatMessage) else m for m in value]
        return value


class ChatResponseModel(WireModel):
    """Validated chat endpoint response."""

    html: str = Field(min_length=1)
    title: str | None = None
    message: str | None = None
    warnings: list[str] | None = None


class ChatResponse(BaseModel):
    """Chat result returned to callers."""

    model_config = ConfigDict(frozen=True)

    html: str
    title: str | None = None
    message: str | None = None
    warnings: list[str] = Field(default_factory=list)

    @classmethod
    def from_parsed(cls, parsed: ChatResponseModel) -> ChatResponse:
        return cls(
            html=parsed.html,
            title=parsed.title,
            message=parsed.message,
            warnings=parsed.warnings or [],
        )


# Save / load / list


class SaveMeta(WireModel):
    created_at: str | None = None
    byof_version: str | None = None


class SaveRequest(WireModel):
    """Request payload for saving a generated UI."""

    _verbatim_fields: ClassVar[tuple[str, ...]] = ("context",)

    html: str
    name: str | None = None
    messages: list[ChatMessage] | None = None
    api_spec: str | None = None
    context: dict[str, Any] | None = None
    meta: SaveMeta | None = None


class SaveResponse(WireModel):
    """Response from the save endpoint."""

    id: str = Field(min_length=1)
    name: str | None = None
    updated_at: str | None = None


class LoadRequest(WireModel):
    id: str


class LoadResponse(WireModel):
    """Response from the load endpoint."""

    id: str = Field(min_length=1)
    html: str = Field(min_length=1)
    name: str | None = None
    messages: list[StoredMessage] | None = None
    api_spec: str | None = None
    updated_at: str | None = None


class ListRequest(WireModel):
    project_id: str | None = None


class ListItem(WireModel):
    id: str
    name: str | None = None
    updated_at: str | None = None


class ListResponse(WireModel):
    """Response from the list endpoint."""

    items: list[ListItem]

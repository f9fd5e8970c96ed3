"""Chat endpoint client."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from byof_client.constants import chat_timeout_ms
from byof_client.errors import ByofErrorCode
from byof_client.request import RequestDescriptor, execute, validate_request
from byof_client.structured import PydanticSchema
from byof_client.telemetry import get_logger
from byof_client.types import ChatMessage, ChatRequest, ChatResponse, ChatResponseModel

if TYPE_CHECKING:
    from collections.abc import Sequence

    from byof_client.client.cancel import CancelToken
    from byof_client.telemetry import Logger
    from byof_client.transport import Transport

_CHAT_REQUEST = PydanticSchema(ChatRequest)
_CHAT_SCHEMA = PydanticSchema(ChatResponseModel)

_logger = get_logger("byof_client.chat")


async def send_chat(
    endpoint: str,
    messages: Sequence[ChatMessage | dict[str, Any]],
    system_prompt: str,
    *,
    api_spec: str | None = None,
    context: dict[str, Any] | None = None,
    timeout_ms: float | None = None,
    token: CancelToken | None = None,
    logger: Logger | None = None,
    transport: Transport | None = None,
) -> ChatResponse:
    """Send a chat request to the generation endpoint.

    Args:
        endpoint: Chat endpoint URL
        messages: Prior messages, oldest first
        system_prompt: System instruction
        api_spec: API spec as a JSON string, forwarded for backend reference
        context: Caller context, sent verbatim under ``context``
        timeout_ms: Timeout in milliseconds (default: ``BYOF_CHAT_TIMEOUT_MS``
            or 300000)
        token: Cancellation token
        logger: Logger for observability
        transport: Outbound call capability

    Returns:
        ChatResponse with the generated HTML

    Raises:
        ByofError: ``CHAT_ERROR`` on invalid input, bad status or invalid
            payload; ``NETWORK_ERROR`` on a bad endpoint, transport failure,
            timeout or cancellation
    """
    log = logger or _logger
    request = validate_request(
        _CHAT_REQUEST,
        {
            "messages": messages,
            "system_prompt": system_prompt,
            "api_spec": api_spec,
            "context": context,
        },
        error_code=ByofErrorCode.CHAT_ERROR,
        operation_name="Chat",
        logger=log,
    )

    log.debug(
        "Sending chat request",
        endpoint=endpoint,
        message_count=len(request.messages),
        system_prompt_length=len(request.system_prompt),
    )

    result = await execute(
        RequestDescriptor(
            endpoint=endpoint,
            body=request,
            schema=_CHAT_SCHEMA,
            error_code=ByofErrorCode.CHAT_ERROR,
            network_error_code=ByofErrorCode.NETWORK_ERROR,
            operation_name="Chat",
            timeout_ms=timeout_ms if timeout_ms is not None else chat_timeout_ms(),
            token=token,
            logger=log,
        ),
        transport=transport,
    )
    parsed = result.data

    log.info(
        "Chat response received",
        html_length=len(parsed.html),
        title=parsed.title,
        warning_count=len(parsed.warnings or []),
    )

    return ChatResponse.from_parsed(parsed)

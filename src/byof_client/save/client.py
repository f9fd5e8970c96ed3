"""Save/load/list endpoint client.

Saved UIs live behind a single base endpoint: saving posts to the base
URL, loading and listing post to ``<base>/load`` and ``<base>/list``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from byof_client.constants import save_timeout_ms
from byof_client.errors import ByofErrorCode
from byof_client.request import RequestDescriptor, execute, validate_request
from byof_client.structured import PydanticSchema
from byof_client.telemetry import get_logger
from byof_client.types import (
    ChatMessage,
    ListRequest,
    ListResponse,
    LoadRequest,
    LoadResponse,
    SaveMeta,
    SaveRequest,
    SaveResponse,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from byof_client.client.cancel import CancelToken
    from byof_client.telemetry import Logger
    from byof_client.transport import Transport

_SAVE_REQUEST = PydanticSchema(SaveRequest)
_LOAD_REQUEST = PydanticSchema(LoadRequest)
_LIST_REQUEST = PydanticSchema(ListRequest)

_SAVE_SCHEMA = PydanticSchema(SaveResponse)
_LOAD_SCHEMA = PydanticSchema(LoadResponse)
_LIST_SCHEMA = PydanticSchema(ListResponse)

_logger = get_logger("byof_client.save")


def join_endpoint(endpoint: str, suffix: str) -> str:
    """Append a path segment without doubling the slash."""
    return f"{endpoint}{suffix}" if endpoint.endswith("/") else f"{endpoint}/{suffix}"


def _resolve_timeout(timeout_ms: float | None) -> float:
    return timeout_ms if timeout_ms is not None else save_timeout_ms()


async def save_ui(
    endpoint: str,
    html: str,
    *,
    name: str | None = None,
    messages: Sequence[ChatMessage | dict[str, Any]] | None = None,
    api_spec: str | None = None,
    context: dict[str, Any] | None = None,
    meta: SaveMeta | None = None,
    timeout_ms: float | None = None,
    token: CancelToken | None = None,
    logger: Logger | None = None,
    transport: Transport | None = None,
) -> SaveResponse:
    """Save a generated UI.

    Returns:
        SaveResponse with the saved item ID

    Raises:
        ByofError: ``SAVE_ERROR`` on invalid input, bad status or invalid
            payload; ``NETWORK_ERROR`` otherwise
    """
    log = logger or _logger
    request = validate_request(
        _SAVE_REQUEST,
        {
            "html": html,
            "name": name,
            "messages": messages,
            "api_spec": api_spec,
            "context": context,
            "meta": meta,
        },
        error_code=ByofErrorCode.SAVE_ERROR,
        operation_name="Save",
        logger=log,
    )

    log.debug(
        "Saving UI",
        endpoint=endpoint,
        html_length=len(request.html),
        has_messages=bool(request.messages),
    )

    result = await execute(
        RequestDescriptor(
            endpoint=endpoint,
            body=request,
            schema=_SAVE_SCHEMA,
            error_code=ByofErrorCode.SAVE_ERROR,
            operation_name="Save",
            timeout_ms=_resolve_timeout(timeout_ms),
            token=token,
            logger=log,
        ),
        transport=transport,
    )

    log.info("Save completed", id=result.data.id, name=result.data.name)
    return result.data


async def load_ui(
    endpoint: str,
    id: str,
    *,
    timeout_ms: float | None = None,
    token: CancelToken | None = None,
    logger: Logger | None = None,
    transport: Transport | None = None,
) -> LoadResponse:
    """Load a previously saved UI.

    Raises:
        ByofError: ``LOAD_ERROR`` on invalid input, bad status or invalid
            payload; ``NETWORK_ERROR`` otherwise
    """
    log = logger or _logger
    log.debug("Loading UI", endpoint=endpoint, id=id)

    result = await execute(
        RequestDescriptor(
            endpoint=join_endpoint(endpoint, "load"),
            body=validate_request(
                _LOAD_REQUEST,
                {"id": id},
                error_code=ByofErrorCode.LOAD_ERROR,
                operation_name="Load",
                logger=log,
            ),
            schema=_LOAD_SCHEMA,
            error_code=ByofErrorCode.LOAD_ERROR,
            operation_name="Load",
            timeout_ms=_resolve_timeout(timeout_ms),
            token=token,
            logger=log,
        ),
        transport=transport,
    )

    parsed = result.data
    log.info(
        "Load completed",
        id=parsed.id,
        name=parsed.name,
        html_length=len(parsed.html),
    )
    return parsed


async def list_saved_uis(
    endpoint: str,
    *,
    project_id: str | None = None,
    timeout_ms: float | None = None,
    token: CancelToken | None = None,
    logger: Logger | None = None,
    transport: Transport | None = None,
) -> ListResponse:
    """List saved UIs, optionally filtered by project.

    Raises:
        ByofError: ``LOAD_ERROR`` on invalid input, bad status or invalid
            payload; ``NETWORK_ERROR`` otherwise
    """
    log = logger or _logger
    log.debug("Listing saved UIs", endpoint=endpoint, project_id=project_id)

    result = await execute(
        RequestDescriptor(
            endpoint=join_endpoint(endpoint, "list"),
            body=validate_request(
                _LIST_REQUEST,
                {"project_id": project_id},
                error_code=ByofErrorCode.LOAD_ERROR,
                operation_name="List",
                logger=log,
            ),
            schema=_LIST_SCHEMA,
            error_code=ByofErrorCode.LOAD_ERROR,
            operation_name="List",
            timeout_ms=_resolve_timeout(timeout_ms),
            token=token,
            logger=log,
        ),
        transport=transport,
    )

    log.info("List completed", item_count=len(result.data.items))
    return result.data

"""Validated request executor.

Performs one timed, cancellable POST and validates the response payload:

1. arm a timeout token and combine it with the caller's token
2. issue exactly one POST with a JSON body, bound to the combined token
3. classify the outcome by phase:

   - non-success status or invalid payload -> ``descriptor.error_code``
   - bad endpoint, unencodable body, transport failure, timeout or
     cancellation -> ``descriptor.network_error_code``

Every failure leaves as exactly one ``ByofError`` and is logged once, at
the point where it is classified. Nothing is retried.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generic, TypeVar
from urllib.parse import urlsplit

from pydantic import BaseModel

from byof_client.client.cancel import CancelToken, combine_tokens, never_cancelled
from byof_client.errors import ByofError, ByofErrorCode, is_cancellation
from byof_client.structured import as_validator
from byof_client.telemetry import get_logger
from byof_client.transport import HttpxTransport

if TYPE_CHECKING:
    from byof_client.structured import PydanticSchema, SchemaValidator
    from byof_client.telemetry import Logger
    from byof_client.transport import Transport, TransportResponse

T = TypeVar("T")

_JSON_HEADERS = {"Content-Type": "application/json"}

_default_logger = get_logger("byof_client.request")


@dataclass(frozen=True)
class RequestDescriptor(Generic[T]):
    """Everything one validated request needs.

    Attributes:
        endpoint: Absolute http(s) URL (checked when executed)
        body: JSON-serializable body, or a pydantic model
        schema: Response shape (validator, pydantic type or JSON Schema dict)
        error_code: Code for bad status and invalid payloads
        operation_name: Name used in messages and logs (e.g. "Chat")
        timeout_ms: Time budget in milliseconds (> 0)
        network_error_code: Code for transport failures and cancellation
        token: Optional external cancellation token
        logger: Logger capability
    """

    endpoint: str
    body: Any
    schema: Any
    error_code: ByofErrorCode
    operation_name: str
    timeout_ms: float
    network_error_code: ByofErrorCode = ByofErrorCode.NETWORK_ERROR
    token: CancelToken | None = None
    logger: Logger = field(default=_default_logger)

    def __post_init__(self) -> None:
        if not self.operation_name:
            raise ValueError("operation_name must not be empty")

    @property
    def validator(self) -> SchemaValidator:
        return as_validator(self.schema)

    def encode_body(self) -> bytes:
        """Serialize the body to JSON bytes."""
        body = self.body
        if isinstance(body, BaseModel):
            to_wire = getattr(body, "to_wire", None)
            body = to_wire() if to_wire else body.model_dump(
                by_alias=True, exclude_none=True, mode="json"
            )
        return json.dumps(body, ensure_ascii=False).encode("utf-8")


@dataclass(frozen=True)
class RequestResult(Generic[T]):
    """Success envelope holding the validated payload."""

    data: T


def _check_request(descriptor: RequestDescriptor[Any]) -> None:
    if not isinstance(descriptor.endpoint, str):
        raise TypeError(f"endpoint must be a string, got {type(descriptor.endpoint).__name__}")
    parts = urlsplit(descriptor.endpoint)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ValueError(f"endpoint must be an absolute http(s) URL: {descriptor.endpoint!r}")
    if not descriptor.timeout_ms > 0:
        raise ValueError(f"timeout_ms must be positive, got {descriptor.timeout_ms!r}")


def validate_request(
    schema: PydanticSchema[T],
    fields: dict[str, Any],
    *,
    error_code: ByofErrorCode,
    operation_name: str,
    logger: Logger,
) -> T:
    """Build a request model from caller input.

    Args:
        schema: Request model schema
        fields: Model fields by Python name
        error_code: Code to raise on invalid input
        operation_name: Name used in messages and logs
        logger: Logger capability

    Returns:
        Validated request model

    Raises:
        ByofError: With ``error_code`` if the input does not fit the model
    """
    result = schema.validate(fields)
    if not result.valid:
        logger.error(
            f"Invalid {operation_name.lower()} request",
            errors=[v.to_dict() for v in result.violations],
        )
        raise ByofError(
            error_code,
            f"Invalid request: {result.error_message}",
            list(result.violations),
        )
    return result.data  # type: ignore[return-value]


async def _read_error_body(response: TransportResponse) -> str:
    try:
        text = await response.text()
    except Exception:
        return ""
    return text or ""


async def execute(
    descriptor: RequestDescriptor[T],
    *,
    transport: Transport | None = None,
) -> RequestResult[T]:
    """Perform one validated request.

    Args:
        descriptor: Request description
        transport: Outbound call capability (default: ``HttpxTransport``)

    Returns:
        Success envelope with the validated payload

    Raises:
        ByofError: On any failure
    """
    op = descriptor.operation_name
    logger = descriptor.logger
    validator = descriptor.validator

    try:
        _check_request(descriptor)
        content = descriptor.encode_body()
    except (TypeError, ValueError) as e:
        logger.error(f"{op} request failed", error=repr(e))
        raise ByofError(
            descriptor.network_error_code,
            f"{op} request failed",
            cause=e,
        ) from e

    transport = transport or HttpxTransport()

    timeout_token = CancelToken(timeout=descriptor.timeout_ms / 1000.0)
    token = combine_tokens(timeout_token, descriptor.token or never_cancelled())

    try:
        try:
            response = await transport.post(
                descriptor.endpoint,
                content=content,
                headers=dict(_JSON_HEADERS),
                token=token,
            )
        finally:
            timeout_token.clear_timeout()

        if not response.is_success:
            error_text = await _read_error_body(response)
            logger.error(
                f"{op} request HTTP error",
                status=response.status_code,
                status_text=response.reason_phrase,
            )
            raise ByofError(
                descriptor.error_code,
                f"{op} request failed: {response.status_code} {response.reason_phrase}",
                {"status": response.status_code, "body": error_text},
            )

        try:
            data = await response.json()
        except ValueError as e:
            logger.error(f"Invalid {op.lower()} response", errors=["body is not valid JSON"])
            raise ByofError(
                descriptor.error_code,
                "Invalid response: body is not valid JSON",
                cause=e,
            ) from e

        result = validator.validate(data)
        if not result.valid:
            logger.error(
                f"Invalid {op.lower()} response",
                errors=[v.to_dict() for v in result.violations],
            )
            raise ByofError(
                descriptor.error_code,
                f"Invalid response: {result.error_message}",
                list(result.violations),
            )

        return RequestResult(data=result.data)  # type: ignore[arg-type]

    except ByofError:
        raise
    except Exception as e:
        if is_cancellation(e):
            logger.warning(f"{op} request aborted or timed out")
            raise ByofError(
                descriptor.network_error_code,
                f"{op} request timed out or was aborted",
                cause=e,
            ) from e

        logger.error(f"{op} request failed", error=repr(e))
        raise ByofError(
            descriptor.network_error_code,
            f"{op} request failed",
            cause=e,
        ) from e
    finally:
        timeout_token.clear_timeout()
        token.dispose()

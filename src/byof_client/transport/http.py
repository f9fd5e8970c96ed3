"""HTTP transport using httpx for async requests.

Provides:
- The transport capability the request executor depends on
- An httpx-backed implementation bound to a cancellation token
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import httpx

from byof_client.client.cancel import run_cancellable
from byof_client.constants import trust_env_enabled

if TYPE_CHECKING:
    from byof_client.client.cancel import CancelToken


_DEFAULT_CONNECT_TIMEOUT = 10.0

_UA_VERSION: str | None = None


def _get_ua_version() -> str:
    """Get package version for User-Agent (cached)."""
    global _UA_VERSION
    if _UA_VERSION is None:
        from importlib.metadata import PackageNotFoundError, version

        try:
            _UA_VERSION = version("byof-client")
        except PackageNotFoundError:
            from byof_client import __version__

            _UA_VERSION = __version__
    return _UA_VERSION


@runtime_checkable
class TransportResponse(Protocol):
    """A settled HTTP response."""

    @property
    def status_code(self) -> int: ...

    @property
    def reason_phrase(self) -> str: ...

    @property
    def is_success(self) -> bool: ...

    async def text(self) -> str: ...

    async def json(self) -> Any: ...


@runtime_checkable
class Transport(Protocol):
    """Outbound call capability.

    Implementations must raise ``AbortError`` when ``token`` fires before
    the call settles. Network failures may surface as any exception.
    """

    async def post(
        self,
        url: str,
        *,
        content: bytes,
        headers: dict[str, str],
        token: CancelToken,
    ) -> TransportResponse: ...


class HttpxResponse:
    """Adapts a fully read ``httpx.Response``."""

    def __init__(self, response: httpx.Response) -> None:
        self._response = response

    @property
    def status_code(self) -> int:
        return self._response.status_code

    @property
    def reason_phrase(self) -> str:
        return self._response.reason_phrase

    @property
    def is_success(self) -> bool:
        return self._response.is_success

    async def text(self) -> str:
        return self._response.text

    async def json(self) -> Any:
        return self._response.json()


class HttpxTransport:
    """HTTP transport backed by ``httpx.AsyncClient``.

    Without an injected client, every call opens and closes its own client,
    so no connection outlives the request.

    Example:
        >>> transport = HttpxTransport()
        >>> response = await transport.post(
        ...     "https://api.example.com/chat",
        ...     content=b"{}",
        ...     headers={"Content-Type": "application/json"},
        ...     token=CancelToken(),
        ... )
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        proxy: str | None = None,
    ) -> None:
        """Initialize HTTP transport.

        Args:
            client: Optional caller-owned client (never closed here)
            proxy: Proxy URL for per-call clients
        """
        self._client = client
        self._proxy = proxy

    def _new_client(self) -> httpx.AsyncClient:
        # The request deadline is owned by the caller's cancel token, so
        # httpx only bounds the connect phase.
        timeout = httpx.Timeout(None, connect=_DEFAULT_CONNECT_TIMEOUT)
        return httpx.AsyncClient(
            timeout=timeout,
            proxy=self._proxy,
            trust_env=trust_env_enabled(),
        )

    def _build_headers(self, headers: dict[str, str]) -> dict[str, str]:
        request_headers = {
            "Accept": "application/json",
            "User-Agent": f"byof-client/{_get_ua_version()}",
        }
        request_headers.update(headers)
        return request_headers

    async def post(
        self,
        url: str,
        *,
        content: bytes,
        headers: dict[str, str],
        token: CancelToken,
    ) -> HttpxResponse:
        """Make a POST request bound to a cancellation token.

        Args:
            url: Absolute URL
            content: Encoded request body
            headers: Request headers
            token: Cancellation token

        Returns:
            Settled response with its body read

        Raises:
            AbortError: If the token fired first
            httpx.HTTPError: On network/connection errors
        """
        token.raise_if_cancelled()
        request_headers = self._build_headers(headers)

        if self._client is not None:
            response = await run_cancellable(
                self._client.post(url, content=content, headers=request_headers),
                token,
            )
            return HttpxResponse(response)

        async with self._new_client() as client:
            response = await run_cancellable(
                client.post(url, content=content, headers=request_headers),
                token,
            )
        return HttpxResponse(response)

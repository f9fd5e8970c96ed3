"""
Integration test fixtures.

Requests go through the real ``HttpxTransport``; pytest-httpx intercepts
them at the httpx transport layer.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

import httpx
import pytest

if TYPE_CHECKING:
    import pytest_httpx


def _chat_body(
    html: str = "<html><body>Dashboard</body></html>",
    title: str | None = "Dashboard",
    warnings: list[str] | None = None,
) -> dict[str, Any]:
    body: dict[str, Any] = {"html": html}
    if title is not None:
        body["title"] = title
    if warnings is not None:
        body["warnings"] = warnings
    return body


@pytest.fixture
def chat_body():
    """Build a chat endpoint response body."""
    return _chat_body


@pytest.fixture
def slow_endpoint(httpx_mock: pytest_httpx.HTTPXMock):
    """Register an endpoint that answers only after ``delay`` seconds."""

    def register(url: str, delay: float = 5.0) -> None:
        async def respond(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(delay)
            return httpx.Response(200, json=_chat_body())

        httpx_mock.add_callback(respond, url=url, method="POST")

    return register

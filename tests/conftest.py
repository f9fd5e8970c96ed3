"""Root pytest fixtures for byof-client tests."""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field
from typing import Any

import pytest

from byof_client.client import CancelToken
from byof_client.errors import AbortError

CHAT_URL = "https://api.example.com/chat"
SAVE_URL = "https://api.example.com/saves"


class RecordingLogger:
    """Logger capability that records every call."""

    def __init__(self) -> None:
        self.records: list[tuple[str, str, dict[str, Any]]] = []

    def _record(self, level: str, msg: str, fields: dict[str, Any]) -> None:
        self.records.append((level, msg, fields))

    def debug(self, msg: str, **fields: Any) -> None:
        self._record("debug", msg, fields)

    def info(self, msg: str, **fields: Any) -> None:
        self._record("info", msg, fields)

    def warning(self, msg: str, **fields: Any) -> None:
        self._record("warning", msg, fields)

    def error(self, msg: str, **fields: Any) -> None:
        self._record("error", msg, fields)

    def at(self, level: str) -> list[tuple[str, dict[str, Any]]]:
        """Messages and fields logged at ``level``."""
        return [(msg, fields) for lvl, msg, fields in self.records if lvl == level]


@dataclass
class FakeResponse:
    """Settled response returned by ``FakeTransport``."""

    status_code: int = 200
    reason_phrase: str = "OK"
    payload: Any = None
    raw_text: str | None = None
    text_error: Exception | None = None

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    async def text(self) -> str:
        if self.text_error is not None:
            raise self.text_error
        if self.raw_text is not None:
            return self.raw_text
        return json.dumps(self.payload)

    async def json(self) -> Any:
        if self.raw_text is not None:
            return json.loads(self.raw_text)
        return self.payload


@dataclass
class FakeTransport:
    """In-memory transport.

    Attributes:
        response: Response to settle with
        error: Exception to raise instead of responding
        hang: Never respond on its own; with ``honor_cancel`` the call
            raises ``AbortError`` once the token fires
        honor_cancel: Whether a hanging call observes the token
        delay: Seconds to wait before settling
    """

    response: FakeResponse | None = None
    error: BaseException | None = None
    hang: bool = False
    honor_cancel: bool = True
    delay: float = 0.0
    calls: list[dict[str, Any]] = field(default_factory=list)

    async def post(
        self,
        url: str,
        *,
        content: bytes,
        headers: dict[str, str],
        token: CancelToken,
    ) -> FakeResponse:
        self.calls.append(
            {
                "url": url,
                "headers": headers,
                "body": json.loads(content),
                "token": token,
                "cancelled_at_start": token.is_cancelled,
            }
        )
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if self.hang:
            if not self.honor_cancel:
                await asyncio.Event().wait()
            reason = await token.wait()
            raise AbortError(reason=reason)
        assert self.response is not None
        return self.response


@pytest.fixture
def recording_logger() -> RecordingLogger:
    """Fresh recording logger."""
    return RecordingLogger()


@pytest.fixture
def fake_response() -> type[FakeResponse]:
    """FakeResponse factory."""
    return FakeResponse


@pytest.fixture
def fake_transport() -> type[FakeTransport]:
    """FakeTransport factory."""
    return FakeTransport


@pytest.fixture(scope="session")
def chat_url() -> str:
    return CHAT_URL


@pytest.fixture(scope="session")
def save_url() -> str:
    return SAVE_URL

"""Base error classes for byof-client.

Every failure that leaves a request is converted into a single ``ByofError``
carrying a machine-readable ``ByofErrorCode``. Callers branch on ``code``,
never on message text.

``AbortError`` is not part of the public error surface: it is what the
transport layer raises when a cancellation token fires, and the executor
turns it into a ``ByofError`` with the network error code.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ByofErrorCode(str, Enum):
    """Machine-readable error codes."""

    CHAT_ERROR = "CHAT_ERROR"
    """Chat request or response was invalid, or the endpoint returned a bad status."""

    SAVE_ERROR = "SAVE_ERROR"
    """Save request or response was invalid, or the endpoint returned a bad status."""

    LOAD_ERROR = "LOAD_ERROR"
    """Load/list request or response was invalid, or the endpoint returned a bad status."""

    NETWORK_ERROR = "NETWORK_ERROR"
    """Request never settled: bad endpoint, connect failure, timeout or cancellation."""


class ByofError(Exception):
    """The single error type raised to callers.

    Attributes:
        code: Error code chosen by the failure phase
        message: Human-readable error message
        details: Optional structured details (status, body, violations...)
        cause: Optional underlying exception
    """

    def __init__(
        self,
        code: ByofErrorCode,
        message: str,
        details: Any = None,
        *,
        cause: BaseException | None = None,
    ) -> None:
        self._code = ByofErrorCode(code)
        self._message = message
        self._details = details
        self._cause = cause
        super().__init__(f"[{self._code.value}] {message}")
        if cause is not None:
            self.__cause__ = cause

    @property
    def code(self) -> ByofErrorCode:
        return self._code

    @property
    def message(self) -> str:
        return self._message

    @property
    def details(self) -> Any:
        return self._details

    @property
    def cause(self) -> BaseException | None:
        return self._cause

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain ``{code, message, details}`` mapping."""
        return {
            "code": self._code.value,
            "message": self._message,
            "details": self._details,
        }

    def __repr__(self) -> str:
        return f"ByofError(code={self._code.value!r}, message={self._message!r})"


class AbortError(Exception):
    """Raised by the transport layer when a cancellation token fires.

    Exposes the ``name``/``code`` shape recognized by
    :func:`byof_client.errors.classification.is_cancellation`.
    """

    name = "AbortError"
    code = 20

    def __init__(self, message: str = "The operation was aborted", reason: Any = None) -> None:
        super().__init__(message)
        self.reason = reason

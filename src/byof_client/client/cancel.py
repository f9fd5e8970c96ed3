"""
Request cancellation control.

Provides cancellation tokens, token combination and a helper that races an
awaitable against a token.
"""

from __future__ import annotations

import asyncio
import contextlib
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, TypeVar

from byof_client.errors import AbortError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

T = TypeVar("T")


class CancelReason(str, Enum):
    """Reasons for cancellation."""

    USER_REQUEST = "user_request"
    TIMEOUT = "timeout"
    ERROR = "error"
    SHUTDOWN = "shutdown"


@dataclass
class CancelState:
    """State of a cancellation token.

    Attributes:
        cancelled: Whether cancellation was requested
        reason: Reason for cancellation
        timestamp: Time of cancellation
    """

    cancelled: bool = False
    reason: CancelReason | None = None
    timestamp: float | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


class CancelToken:
    """Cancellation token for controlling async operations.

    Cancellation is one-way: once cancelled, a token stays cancelled.

    Example:
        >>> token = CancelToken()
        >>> token.on_cancel(lambda reason: print("cancelled:", reason))
        >>> token.cancel(CancelReason.USER_REQUEST)
        cancelled: CancelReason.USER_REQUEST
    """

    def __init__(self, timeout: float | None = None) -> None:
        """Initialize cancellation token.

        Args:
            timeout: Optional timeout in seconds; expiry cancels the token
                with ``CancelReason.TIMEOUT``
        """
        self._state = CancelState()
        self._event = asyncio.Event()
        self._callbacks: list[Callable[[CancelReason], Any]] = []
        self._timeout = timeout
        self._timeout_task: asyncio.Task[None] | None = None

        if timeout is not None:
            self._start_timeout()

    def _start_timeout(self) -> None:
        """Start the timeout task."""
        async def timeout_handler() -> None:
            await asyncio.sleep(self._timeout)  # type: ignore[arg-type]
            self._timeout_task = None
            self.cancel(CancelReason.TIMEOUT)

        # Requires a running loop; tokens with a timeout are created inside
        # coroutines.
        loop = asyncio.get_running_loop()
        self._timeout_task = loop.create_task(timeout_handler())

    def clear_timeout(self) -> None:
        """Stop the pending timeout, if any. No-op once it has fired."""
        task = self._timeout_task
        self._timeout_task = None
        if task is not None and not task.done():
            task.cancel()

    @property
    def has_pending_timeout(self) -> bool:
        """Check whether a timeout is still armed."""
        return self._timeout_task is not None and not self._timeout_task.done()

    def cancel(
        self,
        reason: CancelReason = CancelReason.USER_REQUEST,
        **metadata: Any,
    ) -> bool:
        """Request cancellation.

        Args:
            reason: Reason for cancellation
            **metadata: Additional metadata

        Returns:
            True if cancellation was newly requested, False if already cancelled
        """
        if self._state.cancelled:
            return False

        self._state.cancelled = True
        self._state.reason = reason
        self._state.timestamp = time.time()
        self._state.metadata.update(metadata)

        self._event.set()
        self.clear_timeout()

        for callback in list(self._callbacks):
            self._invoke(callback, reason)

        return True

    @staticmethod
    def _invoke(callback: Callable[[CancelReason], Any], reason: CancelReason) -> None:
        # A failing listener must not stop the others from being notified.
        with contextlib.suppress(Exception):
            result = callback(reason)
            if asyncio.iscoroutine(result):
                _ = asyncio.ensure_future(result)  # noqa: RUF006

    @property
    def is_cancelled(self) -> bool:
        """Check if cancellation was requested."""
        return self._state.cancelled

    @property
    def reason(self) -> CancelReason | None:
        """Get cancellation reason."""
        return self._state.reason

    @property
    def state(self) -> CancelState:
        """Get full cancellation state."""
        return self._state

    async def wait(self) -> CancelReason:
        """Wait until cancellation is requested.

        Returns:
            Cancellation reason
        """
        await self._event.wait()
        return self._state.reason or CancelReason.USER_REQUEST

    async def wait_with_timeout(self, timeout: float) -> bool:
        """Wait for cancellation with a timeout.

        Args:
            timeout: Timeout in seconds

        Returns:
            True if cancelled, False if timeout occurred
        """
        try:
            await asyncio.wait_for(self._event.wait(), timeout=timeout)
            return True
        except asyncio.TimeoutError:
            return False

    def on_cancel(self, callback: Callable[[CancelReason], Any]) -> CancelToken:
        """Register a callback to be called on cancellation.

        A callback registered on an already cancelled token runs immediately.

        Args:
            callback: Callback function

        Returns:
            Self for chaining
        """
        self._callbacks.append(callback)
        if self._state.cancelled and self._state.reason:
            self._invoke(callback, self._state.reason)
        return self

    def remove_callback(self, callback: Callable[[CancelReason], Any]) -> bool:
        """Detach a previously registered callback.

        Returns:
            True if the callback was registered
        """
        try:
            self._callbacks.remove(callback)
        except ValueError:
            return False
        return True

    @property
    def listener_count(self) -> int:
        """Number of registered callbacks."""
        return len(self._callbacks)

    def raise_if_cancelled(self) -> None:
        """Raise AbortError if cancelled.

        Raises:
            AbortError: If cancellation was requested
        """
        if self._state.cancelled:
            raise AbortError(reason=self._state.reason)


class CombinedCancelToken(CancelToken):
    """Token that is cancelled when either of two source tokens is.

    Listeners stay registered on the sources until :meth:`dispose` is
    called; a request disposes its combined token when it settles.
    """

    def __init__(self, first: CancelToken, second: CancelToken) -> None:
        super().__init__()
        self._sources: tuple[CancelToken, ...] = (first, second)
        self._disposed = False
        for source in self._sources:
            source.on_cancel(self._on_source_cancel)

    def _on_source_cancel(self, reason: CancelReason) -> None:
        self.cancel(reason)

    def dispose(self) -> None:
        """Detach from both source tokens. Idempotent."""
        if self._disposed:
            return
        self._disposed = True
        for source in self._sources:
            source.remove_callback(self._on_source_cancel)

    @property
    def disposed(self) -> bool:
        return self._disposed

    def __enter__(self) -> CombinedCancelToken:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.dispose()


def combine_tokens(first: CancelToken, second: CancelToken) -> CombinedCancelToken:
    """Merge two tokens into one that fires when either fires.

    If either token is already cancelled, the result is cancelled before
    this function returns.

    Args:
        first: First source token
        second: Second source token

    Returns:
        Derived token
    """
    return CombinedCancelToken(first, second)


def never_cancelled() -> CancelToken:
    """Create a token that nothing will cancel."""
    return CancelToken()


async def run_cancellable(awaitable: Awaitable[T], token: CancelToken) -> T:
    """Await ``awaitable`` unless ``token`` fires first.

    Args:
        awaitable: Operation to run
        token: Cancellation token

    Returns:
        Result of the awaitable

    Raises:
        AbortError: If the token was cancelled before the awaitable settled
    """
    if token.is_cancelled:
        if asyncio.iscoroutine(awaitable):
            awaitable.close()
        raise AbortError(reason=token.reason)

    task = asyncio.ensure_future(awaitable)
    waiter = asyncio.ensure_future(token.wait())
    try:
        await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        task.cancel()
        waiter.cancel()
        raise

    if task.done():
        waiter.cancel()
        return task.result()

    task.cancel()
    with contextlib.suppress(asyncio.CancelledError, Exception):
        await task
    raise AbortError(reason=token.reason)

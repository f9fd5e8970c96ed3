"""
Client layer - cancellation primitives shared by every request.
"""

from byof_client.client.cancel import (
    CancelReason,
    CancelState,
    CancelToken,
    CombinedCancelToken,
    combine_tokens,
    never_cancelled,
    run_cancellable,
)

__all__ = [
    "CancelReason",
    "CancelState",
    "CancelToken",
    "CombinedCancelToken",
    "combine_tokens",
    "never_cancelled",
    "run_cancellable",
]

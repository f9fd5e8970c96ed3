"""Error types for byof-client.

``ByofError`` is the only error surface exposed to callers.
"""

from byof_client.errors.base import AbortError, ByofError, ByofErrorCode
from byof_client.errors.classification import (
    ABORT_ERROR_CODE,
    ABORT_ERROR_NAME,
    is_cancellation,
)

__all__ = [
    "ABORT_ERROR_CODE",
    "ABORT_ERROR_NAME",
    "AbortError",
    "ByofError",
    "ByofErrorCode",
    "is_cancellation",
]

"""
Request layer - one timed, cancellable, validated request.
"""

from byof_client.request.executor import (
    RequestDescriptor,
    RequestResult,
    execute,
    validate_request,
)

__all__ = [
    "RequestDescriptor",
    "RequestResult",
    "execute",
    "validate_request",
]

"""
Transport layer - HTTP client for endpoint communication.
"""

from byof_client.transport.http import (
    HttpxResponse,
    HttpxTransport,
    Transport,
    TransportResponse,
)

__all__ = [
    "HttpxResponse",
    "HttpxTransport",
    "Transport",
    "TransportResponse",
]

"""
HTTP client module for Wallet Storage SDK

Transports that carry signed storage requests and the normalized response
types returned by storage operations.
"""

from .response import (
    Blob,
    TransportResponse,
    StorageResponse,
    NotFoundResponse,
    UnauthorizedResponse,
)

from .transport import (
    Transport,
    HttpxTransport,
    RequestsTransport,
    DEFAULT_USER_AGENT,
    call_transport,
)

__all__ = [
    'Blob',
    'TransportResponse',
    'StorageResponse',
    'NotFoundResponse',
    'UnauthorizedResponse',
    'Transport',
    'HttpxTransport',
    'RequestsTransport',
    'DEFAULT_USER_AGENT',
    'call_transport',
]

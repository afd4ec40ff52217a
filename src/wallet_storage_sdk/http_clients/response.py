"""
Normalized responses from storage operations

A ``TransportResponse`` is what an injected transport returns. Storage
operations wrap it into a ``StorageResponse`` (or its ``NotFoundResponse`` /
``UnauthorizedResponse`` variants) whose body accessors can be called any
number of times.
"""

import json
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from ..exceptions import NotFoundError, TransportFailureError, UnauthorizedError

DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class Blob:
    """
    Immutable bytes with a media type
    
    Attributes:
        data: Raw content
        content_type: Media type of the content (empty if unknown)
    """
    data: bytes = b""
    content_type: str = ""
    
    @classmethod
    def from_text(cls, text: str, content_type: str = "text/plain") -> 'Blob':
        return cls(text.encode('utf-8'), content_type)
    
    @classmethod
    def from_json(cls, value: Any, content_type: str = "application/json") -> 'Blob':
        return cls(json.dumps(value).encode('utf-8'), content_type)
    
    @property
    def size(self) -> int:
        return len(self.data)
    
    def text(self, encoding: str = 'utf-8') -> str:
        return self.data.decode(encoding)
    
    def json(self) -> Any:
        return json.loads(self.data)


@dataclass
class TransportResponse:
    """
    Raw response produced by a transport
    
    Attributes:
        status: HTTP status code
        headers: Response headers as (name, value) pairs
        content: Response body
        reason: HTTP reason phrase, if known
    """
    status: int
    headers: List[Tuple[str, str]] = field(default_factory=list)
    content: bytes = b""
    reason: str = ""
    
    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class StorageResponse:
    """
    Response to a storage operation
    
    Attributes:
        status: HTTP status code
        ok: True iff the transport reported success (2xx)
        headers: Response headers as (name, value) pairs
    """
    
    def __init__(self, raw: TransportResponse):
        self.status: int = raw.status
        self.ok: bool = raw.ok
        self.reason: str = raw.reason
        self.headers: List[Tuple[str, str]] = [(str(k), str(v)) for k, v in raw.headers]
        self._content = bytes(raw.content)
    
    @classmethod
    def from_transport(cls, raw: TransportResponse) -> 'StorageResponse':
        """Wrap a transport response in the variant matching its status."""
        if raw.status == 404:
            return NotFoundResponse(raw)
        if raw.status == 401:
            return UnauthorizedResponse(raw)
        return cls(raw)
    
    def get_header(self, name: str) -> Optional[str]:
        """Case-insensitive lookup of the first header with this name."""
        wanted = name.lower()
        for key, value in self.headers:
            if key.lower() == wanted:
                return value
        return None
    
    @property
    def content_type(self) -> str:
        return self.get_header('content-type') or ""
    
    async def blob(self) -> Blob:
        """Get the body as a Blob. Each call returns an independent copy."""
        return Blob(bytes(self._content), self.content_type)
    
    async def text(self, encoding: str = 'utf-8') -> str:
        return bytes(self._content).decode(encoding)
    
    async def json(self) -> Any:
        """Parse the body as JSON. Each call parses a fresh copy."""
        return json.loads(bytes(self._content))
    
    def raise_for_status(self) -> 'StorageResponse':
        """
        Raise a typed error unless the response is successful.
        
        Raises:
            NotFoundError: On 404
            UnauthorizedError: On 401
            TransportFailureError: On any other non-2xx status
        """
        if self.ok:
            return self
        if self.status == 404:
            raise NotFoundError("Resource not found", response=self)
        if self.status == 401:
            raise UnauthorizedError("Request not authorized", response=self)
        raise TransportFailureError(
            f"Server request failed: HTTP {self.status}{': ' + self.reason if self.reason else ''}",
            http_status=self.status,
            response=self,
        )
    
    def __repr__(self) -> str:
        return f"{type(self).__name__}(status={self.status}, ok={self.ok})"


class NotFoundResponse(StorageResponse):
    """Response indicating nothing exists at the requested path (404)"""


class UnauthorizedResponse(StorageResponse):
    """Response indicating the request lacked a valid authorization (401)"""

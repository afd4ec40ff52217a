"""
Transports that carry storage requests over HTTP

A transport is any async callable ``(location, *, method, headers, body)``
returning a ``TransportResponse``. ``HttpxTransport`` is the default used when
a ``StorageClient`` is given a base URL; ``RequestsTransport`` runs a
``requests.Session`` with retry/backoff in a worker thread. Retries, rate
limiting and connection reuse belong here, never in the storage client.
"""

import asyncio
import logging
from typing import Dict, Optional, Protocol
from urllib.parse import urljoin, urlparse

import httpx
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..exceptions import TransportFailureError, ValidationError, WalletStorageSDKError
from ..version import __version__
from .response import TransportResponse

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = f"WalletStorage-Python-SDK/{__version__}"


class Transport(Protocol):
    """Async HTTP transport injected into storage clients"""
    
    async def __call__(
        self,
        location: str,
        *,
        method: str,
        headers: Dict[str, str],
        body: Optional[bytes] = None,
    ) -> TransportResponse:
        ...


async def call_transport(
    transport: Transport,
    location: str,
    *,
    method: str,
    headers: Dict[str, str],
    body: Optional[bytes] = None,
) -> TransportResponse:
    """
    Send one request through an injected transport.
    
    SDK errors raised by the transport propagate unchanged; anything else it
    raises surfaces as a TransportFailureError chained to the original.
    """
    try:
        return await transport(location, method=method, headers=headers, body=body)
    except WalletStorageSDKError:
        raise
    except Exception as e:
        raise TransportFailureError(
            f"Request failed: {e}",
            "CONNECTION_ERROR",
            details={"method": method, "location": location, "original_error": str(e)}
        ) from e


def _validate_base_url(base_url: str) -> str:
    if not base_url:
        raise ValidationError("Base URL cannot be empty")
    
    parsed = urlparse(base_url)
    if not parsed.scheme or not parsed.netloc:
        raise ValidationError(f"Invalid base URL format: {base_url}")
    
    return base_url


class HttpxTransport:
    """
    Async transport backed by ``httpx.AsyncClient``.
    
    Paths are resolved against ``base_url`` the same way a browser resolves
    a relative reference, so ``/space/x`` always lands at the server root.
    """
    
    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        verify_ssl: bool = True,
        user_agent: str = DEFAULT_USER_AGENT,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = _validate_base_url(base_url)
        self.timeout = timeout
        self._client = client or httpx.AsyncClient(
            timeout=timeout,
            verify=verify_ssl,
            headers={'User-Agent': user_agent},
        )
        logger.debug(f"Initialized httpx transport for server: {base_url}")
    
    async def __call__(
        self,
        location: str,
        *,
        method: str,
        headers: Dict[str, str],
        body: Optional[bytes] = None,
    ) -> TransportResponse:
        url = urljoin(self.base_url, location)
        logger.debug(f"Making {method} request to {url}")
        try:
            response = await self._client.request(method, url, headers=headers, content=body)
        except httpx.TimeoutException as e:
            raise TransportFailureError(f"Request timeout after {self.timeout} seconds", "TIMEOUT") from e
        except httpx.HTTPError as e:
            raise TransportFailureError(f"Request failed: {e}", "CONNECTION_ERROR") from e
        
        return TransportResponse(
            status=response.status_code,
            headers=list(response.headers.multi_items()),
            content=response.content,
            reason=response.reason_phrase,
        )
    
    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
        logger.debug("httpx transport closed")
    
    async def __aenter__(self) -> 'HttpxTransport':
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()


class RequestsTransport:
    """
    Transport backed by a ``requests.Session`` with retry logic.
    
    Each request runs in a worker thread so callers can still await it.
    """
    
    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        verify_ssl: bool = True,
        retry_attempts: int = 0,
        retry_backoff_factor: float = 0.3,
        user_agent: str = DEFAULT_USER_AGENT,
        session: Optional[requests.Session] = None,
    ):
        if retry_attempts < 0:
            raise ValidationError("Retry attempts must be non-negative")
        
        self.base_url = _validate_base_url(base_url)
        self.timeout = timeout
        self.verify_ssl = verify_ssl
        self.retry_attempts = retry_attempts
        self.retry_backoff_factor = retry_backoff_factor
        self.session = session or self._create_session(user_agent)
        logger.debug(f"Initialized requests transport for server: {base_url}")
    
    def _create_session(self, user_agent: str) -> requests.Session:
        """Create HTTP session with retry logic."""
        session = requests.Session()
        
        # Configure retry strategy
        retry_strategy = Retry(
            total=self.retry_attempts,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["HEAD", "GET", "PUT", "DELETE", "OPTIONS", "TRACE", "POST"],
            backoff_factor=self.retry_backoff_factor,
            raise_on_status=False,
        )
        
        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        
        session.headers.update({'User-Agent': user_agent})
        return session
    
    def _request(self, method: str, url: str, headers: Dict[str, str], body: Optional[bytes]) -> TransportResponse:
        try:
            response = self.session.request(
                method,
                url,
                headers=headers,
                data=body,
                timeout=self.timeout,
                verify=self.verify_ssl,
            )
        except requests.exceptions.Timeout as e:
            raise TransportFailureError(f"Request timeout after {self.timeout} seconds", "TIMEOUT") from e
        except requests.exceptions.ConnectionError as e:
            raise TransportFailureError(f"Connection error: {e}", "CONNECTION_ERROR") from e
        except requests.exceptions.RequestException as e:
            raise TransportFailureError(f"Request failed: {e}") from e
        
        return TransportResponse(
            status=response.status_code,
            headers=list(response.headers.items()),
            content=response.content,
            reason=response.reason or "",
        )
    
    async def __call__(
        self,
        location: str,
        *,
        method: str,
        headers: Dict[str, str],
        body: Optional[bytes] = None,
    ) -> TransportResponse:
        url = urljoin(self.base_url, location)
        logger.debug(f"Making {method} request to {url}")
        return await asyncio.to_thread(self._request, method, url, headers, body)
    
    def close(self) -> None:
        """Close the HTTP session."""
        self.session.close()
        logger.debug("HTTP session closed")

"""
Utility functions for request signing

This module provides timestamp handling, URL handling for request targets,
header normalization and base64 helpers.
"""

import base64
import binascii
import inspect
import time
from typing import Any, Dict, Optional
from urllib.parse import quote, urljoin, urlparse

from ..exceptions import SigningError

# Characters left as-is when percent-encoding a path or query the way HTTP
# clients do on the wire. Existing escapes are kept.
_PATH_SAFE = "/%:@!$&'()*+,;=~"
_QUERY_SAFE = _PATH_SAFE + "?"


def generate_timestamp() -> int:
    """
    Generate current Unix timestamp.
    
    Returns:
        int: Current Unix timestamp (seconds since epoch)
    """
    return int(time.time())


def resolve_url(location: str, origin: str) -> str:
    """
    Resolve a path-only location against an origin.
    
    Absolute URLs are returned unchanged.
    """
    return urljoin(origin, location)


def parse_request_target(url: str) -> str:
    """
    Get the percent-encoded path and query of a URL, as used in (request-target).
    
    Non-ASCII characters and spaces are encoded as UTF-8 escapes so the value
    matches the path a server receives.
    
    Args:
        url: Absolute URL
        
    Returns:
        str: pathname plus ``?query`` when present
        
    Raises:
        SigningError: If URL format is invalid
    """
    parsed = urlparse(url)
    if not parsed.scheme or not parsed.netloc:
        raise SigningError(
            f"Invalid URL format: {url}",
            "INVALID_URL",
            {"url": url}
        )
    
    pathname = quote(parsed.path or "/", safe=_PATH_SAFE)
    search = f"?{quote(parsed.query, safe=_QUERY_SAFE)}" if parsed.query else ""
    return pathname + search


def normalize_header_name(name: str) -> str:
    """
    Normalize header name to lowercase for consistent processing.
    
    Args:
        name: Header name to normalize
        
    Returns:
        str: Lowercase header name
    """
    return name.lower().strip()


def find_header(headers: Dict[str, str], name: str) -> Optional[str]:
    """Case-insensitive header lookup."""
    wanted = normalize_header_name(name)
    for key, value in headers.items():
        if normalize_header_name(key) == wanted:
            return value
    return None


def merge_authorization(headers: Dict[str, str], authorization: Optional[str]) -> Dict[str, str]:
    """
    Merge an authorization value into a copy of the caller's headers.
    
    Any caller-supplied authorization header is replaced regardless of its
    case; every other header is kept as given.
    """
    merged = dict(headers)
    if authorization is None:
        return merged
    for key in list(merged):
        if normalize_header_name(key) == 'authorization':
            del merged[key]
    merged['authorization'] = authorization
    return merged


def to_base64(data: bytes) -> str:
    """Encode bytes as standard padded base64."""
    return base64.b64encode(data).decode('ascii')


def from_base64(value: str) -> bytes:
    """
    Decode a standard base64 string.
    
    Raises:
        SigningError: If the value is not valid base64
    """
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as e:
        raise SigningError(
            f"Invalid base64 value: {e}",
            "INVALID_SIGNATURE_ENCODING",
            {"value": value}
        ) from e


async def maybe_await(value: Any) -> Any:
    """Await ``value`` if it is awaitable, otherwise return it."""
    if inspect.isawaitable(value):
        return await value
    return value

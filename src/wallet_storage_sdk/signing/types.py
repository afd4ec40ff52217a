"""
Type definitions for request signing functionality

This module provides type definitions and data classes for the HTTP Signature
authorization scheme used by Wallet Storage servers.
"""

from typing import Awaitable, Dict, List, Optional, Union, Callable, Protocol, runtime_checkable
from dataclasses import dataclass, field
from enum import Enum


class HttpMethod(str, Enum):
    """HTTP methods supported by storage operations"""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


# Pseudo-headers covered by every signature, in signing order
CREATED_COMPONENT = "(created)"
EXPIRES_COMPONENT = "(expires)"
KEY_ID_COMPONENT = "(key-id)"
REQUEST_TARGET_COMPONENT = "(request-target)"

DEFAULT_COVERED_COMPONENTS = (
    CREATED_COMPONENT,
    EXPIRES_COMPONENT,
    KEY_ID_COMPONENT,
    REQUEST_TARGET_COMPONENT,
)


@runtime_checkable
class Signer(Protocol):
    """
    Digital signature capability
    
    Attributes:
        id: Verification method id used as the signature keyId
            (e.g. a did:key verification method)
    
    ``sign`` receives the bytes to sign and returns the signature bytes,
    either directly or as an awaitable.
    """
    id: str
    
    def sign(self, data: bytes) -> Union[bytes, Awaitable[bytes]]:
        ...


@dataclass
class SignedRequestDescriptor:
    """
    Request about to be signed
    
    Built immediately before dispatch and consumed once by the signing step.
    
    Attributes:
        method: HTTP method
        url: Absolute URL of the request (a placeholder origin for path-only routes)
        headers: Request headers as key-value pairs
        signer: Signer producing the signature
        created: Unix timestamp when the signature was created
        expires: Unix timestamp after which the signature is no longer valid
    """
    method: HttpMethod
    url: str
    headers: Dict[str, str]
    signer: Signer
    created: int
    expires: int
    
    def __post_init__(self):
        """Validate descriptor after initialization"""
        if not self.url:
            raise ValueError("Request URL cannot be empty")
        
        if self.expires < self.created:
            raise ValueError("Signature cannot expire before it is created")


@dataclass
class HttpSignatureResult:
    """
    Generated HTTP signature
    
    Attributes:
        authorization: Value of the Authorization header
        signature_base: Canonical string that was signed
        key_id: Signer id used as keyId
        created: Created timestamp
        expires: Expires timestamp
        covered_components: Covered component names in signing order
    """
    authorization: str
    signature_base: str
    key_id: str
    created: int
    expires: int
    covered_components: List[str] = field(default_factory=list)


@dataclass
class ParsedAuthorization:
    """
    Parameters parsed from a ``Signature`` Authorization header
    
    Attributes:
        key_id: keyId parameter
        created: created parameter
        expires: expires parameter
        headers: Covered component names
        signature: Raw signature bytes
        algorithm: algorithm parameter, when present
    """
    key_id: str
    created: int
    expires: int
    headers: List[str]
    signature: bytes
    algorithm: Optional[str] = None


# Type aliases for convenience
TimestampGenerator = Callable[[], int]
HeaderDict = Dict[str, str]

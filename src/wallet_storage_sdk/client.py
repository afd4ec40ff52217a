"""
Storage client for Wallet Storage servers

``StorageClient`` produces ``Space`` handles, and spaces are the only source
of ``Resource`` handles, so every resource path is contained in the path of
the space that created it. Each operation is a single request/response
round-trip through the injected transport, signed with an HTTP Signature
when a signer is available.
"""

import inspect
import logging
import uuid
from typing import AsyncIterator, Dict, Optional, Union

from .addressing.paths import (
    StorageURLPath,
    normalize_resource_segment,
    space_path_for_id,
)
from .addressing.urn_uuid import is_urn_uuid, parse_urn_uuid, urn_uuid_from_uuid
from .collection import CollectionGetResponseBody, CollectionItem, fetch_collection, iterate_collection_items
from .config.client_config import StorageClientConfig, load_config
from .exceptions import AddressParseError, ValidationError
from .http_clients.response import Blob, StorageResponse
from .http_clients.transport import HttpxTransport, RequestsTransport, Transport, call_transport
from .signing.http_signature import sign_headers
from .signing.signing_config import DEFAULT_SIGNING_CONFIG, HttpSignatureConfig
from .signing.types import HttpMethod, Signer

logger = logging.getLogger(__name__)

Body = Union[Blob, bytes, None]


def _encode_body(body: Body, headers: Dict[str, str]) -> Optional[bytes]:
    """Get request bytes for a body, adding its content-type unless the caller set one."""
    if body is None:
        return None
    if isinstance(body, Blob):
        if body.content_type and not any(k.lower() == 'content-type' for k in headers):
            headers['content-type'] = body.content_type
        return body.data
    if isinstance(body, (bytes, bytearray, memoryview)):
        return bytes(body)
    raise ValidationError(
        f"Request body must be a Blob or bytes, got {type(body).__name__}",
        "INVALID_BODY"
    )


class _SignedRequester:
    """Shared request path for spaces and resources."""
    
    def __init__(
        self,
        transport: Transport,
        signer: Optional[Signer] = None,
        signing_config: Optional[HttpSignatureConfig] = None,
    ):
        self._transport = transport
        self._signer = signer
        self._signing_config = signing_config or DEFAULT_SIGNING_CONFIG
    
    @property
    def signer(self) -> Optional[Signer]:
        """Default signer for operations on this handle."""
        return self._signer
    
    def _resolve_signer(self, signer: Optional[Signer]) -> Optional[Signer]:
        if signer is not None:
            return signer
        return self._signer
    
    async def _send(
        self,
        method: HttpMethod,
        location: str,
        body: Body = None,
        signer: Optional[Signer] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> StorageResponse:
        request_headers = dict(headers or {})
        content = _encode_body(body, request_headers)
        effective_signer = self._resolve_signer(signer)
        request_headers = await sign_headers(
            method,
            location,
            request_headers,
            signer=effective_signer,
            config=self._signing_config,
        )
        logger.debug(
            f"Sending {method.value} {location} "
            f"({'signed as ' + effective_signer.id if effective_signer is not None else 'unsigned'})"
        )
        raw = await call_transport(
            self._transport, location, method=method.value, headers=request_headers, body=content
        )
        response = StorageResponse.from_transport(raw)
        logger.debug(f"{method.value} {location} responded {response.status}")
        return response


class Resource(_SignedRequester):
    """
    A resource within a space at a specific path.
    
    Obtain instances from ``Space.resource``.
    """
    
    type = "Resource"
    
    def __init__(
        self,
        path: str,
        transport: Transport,
        signer: Optional[Signer] = None,
        signing_config: Optional[HttpSignatureConfig] = None,
    ):
        super().__init__(transport, signer, signing_config)
        self._path = StorageURLPath(path)
    
    @property
    def path(self) -> str:
        """Full storage path, ``/space/{uuid}/{resource...}``."""
        return str(self._path)
    
    @property
    def space_path(self) -> str:
        return self._path.space_path
    
    @property
    def resource_path(self) -> str:
        return self._path.resource_path
    
    async def get(self, signer: Optional[Signer] = None, headers: Optional[Dict[str, str]] = None) -> StorageResponse:
        """GET the resource. A missing resource yields a ``NotFoundResponse``."""
        return await self._send(HttpMethod.GET, self.path, signer=signer, headers=headers)
    
    async def put(
        self,
        blob: Body = None,
        signer: Optional[Signer] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> StorageResponse:
        """PUT a representation of the resource; ``None`` creates an empty resource."""
        return await self._send(HttpMethod.PUT, self.path, body=blob, signer=signer, headers=headers)
    
    async def post(
        self,
        blob: Body = None,
        signer: Optional[Signer] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> StorageResponse:
        """POST a blob to the resource."""
        return await self._send(HttpMethod.POST, self.path, body=blob, signer=signer, headers=headers)
    
    async def delete(self, signer: Optional[Signer] = None, headers: Optional[Dict[str, str]] = None) -> StorageResponse:
        """DELETE the resource."""
        return await self._send(HttpMethod.DELETE, self.path, signer=signer, headers=headers)
    
    async def fetch_collection(self, signer: Optional[Signer] = None) -> CollectionGetResponseBody:
        """Fetch this resource as a collection."""
        return await fetch_collection(
            self.path, self._transport, self._resolve_signer(signer), self._signing_config
        )
    
    def items(self, signer: Optional[Signer] = None) -> AsyncIterator[CollectionItem]:
        """Async iterate the items of this resource as a collection."""
        return iterate_collection_items(
            self.path, self._transport, self._resolve_signer(signer), self._signing_config
        )
    
    def __repr__(self) -> str:
        return f"Resource(path={self.path!r})"


class Space(_SignedRequester):
    """
    A space: the top-level namespace of resources.
    
    Raises:
        AddressParseError: On construction, if ``space_id`` is not a urn:uuid
    """
    
    def __init__(
        self,
        space_id: str,
        transport: Transport,
        signer: Optional[Signer] = None,
        signing_config: Optional[HttpSignatureConfig] = None,
    ):
        if not is_urn_uuid(space_id):
            raise AddressParseError(
                "expected space to be a urn:uuid",
                details={"space": space_id}
            )
        super().__init__(transport, signer, signing_config)
        self._id = space_id
        self._path = space_path_for_id(space_id)
    
    @property
    def id(self) -> str:
        return self._id
    
    @property
    def uuid(self) -> str:
        return parse_urn_uuid(self._id).uuid
    
    @property
    def path(self) -> str:
        """Storage path of the space, ``/space/{uuid}``."""
        return self._path
    
    def resource(
        self,
        path: Optional[str] = None,
        signer: Optional[Signer] = None,
        uuid: Optional[str] = None,
    ) -> Resource:
        """
        Get a handle to a resource in this space.
        
        Args:
            path: Resource path within the space; a random uuid is used if omitted
            signer: Default signer for the resource (defaults to the space's)
            uuid: Identifier to use as the path when ``path`` is omitted
        """
        segment = normalize_resource_segment(path, uuid)
        return Resource(
            f"{self.path}{segment}",
            self._transport,
            signer=self._resolve_signer(signer),
            signing_config=self._signing_config,
        )
    
    async def get(self, signer: Optional[Signer] = None, headers: Optional[Dict[str, str]] = None) -> StorageResponse:
        """GET the space representation."""
        return await self._send(HttpMethod.GET, self.path, signer=signer, headers=headers)
    
    async def put(
        self,
        blob: Body = None,
        signer: Optional[Signer] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> StorageResponse:
        """PUT the space representation, creating or updating the space."""
        return await self._send(HttpMethod.PUT, self.path, body=blob, signer=signer, headers=headers)
    
    async def delete(self, signer: Optional[Signer] = None, headers: Optional[Dict[str, str]] = None) -> StorageResponse:
        """DELETE the space."""
        return await self._send(HttpMethod.DELETE, self.path, signer=signer, headers=headers)
    
    async def set_controller(self, controller: Optional[str], signer: Optional[Signer] = None) -> StorageResponse:
        """PUT a space representation naming ``controller`` (a DID) as its controller."""
        space_object = {"id": self.id}
        if controller is not None:
            space_object["controller"] = controller
        return await self.put(Blob.from_json(space_object), signer=signer)
    
    def collection_items(
        self,
        path: Optional[str] = None,
        signer: Optional[Signer] = None,
    ) -> AsyncIterator[CollectionItem]:
        """Async iterate the items of the collection at ``path`` within this space."""
        location = self.path if path is None else f"{self.path}{normalize_resource_segment(path)}"
        return iterate_collection_items(
            location, self._transport, self._resolve_signer(signer), self._signing_config
        )
    
    def __repr__(self) -> str:
        return f"Space(id={self.id!r})"


class StorageClient:
    """
    Client to a remote storage server hosting many spaces.
    
    Build it from a base URL (requests go through ``HttpxTransport``), from a
    ``StorageClientConfig``, or from a fully custom transport.
    """
    
    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        transport: Optional[Transport] = None,
        config: Optional[StorageClientConfig] = None,
        signing_config: Optional[HttpSignatureConfig] = None,
    ):
        if transport is not None and base_url is not None:
            raise ValidationError("Provide either base_url or transport, not both")
        
        if transport is None and base_url is None and config is None:
            raise ValidationError("A base_url, config or transport is required")
        
        if base_url is not None:
            config = StorageClientConfig(base_url=base_url) if config is None else StorageClientConfig(
                **{**config.to_dict(), 'base_url': base_url}
            )
        
        self.config = config
        self._owns_transport = transport is None
        if transport is None:
            transport = create_transport(config)
        self._transport = transport
        
        if signing_config is None and config is not None:
            signing_config = config.signing_config()
        self._signing_config = signing_config or DEFAULT_SIGNING_CONFIG
        
        if config is not None:
            logger.info(f"Initialized storage client for server: {config.base_url}")
    
    @property
    def transport(self) -> Transport:
        return self._transport
    
    def space(self, space_id: Optional[str] = None, signer: Optional[Signer] = None) -> Space:
        """
        Get a handle to a space.
        
        Args:
            space_id: urn:uuid of the space; a fresh one is generated if omitted
            signer: Default signer for operations on the space
            
        Raises:
            AddressParseError: If space_id is not a urn:uuid
        """
        if space_id is None:
            space_id = urn_uuid_from_uuid(uuid.uuid4())
        return Space(space_id, self._transport, signer=signer, signing_config=self._signing_config)
    
    async def aclose(self) -> None:
        """Close the transport if this client created it."""
        if not self._owns_transport:
            return
        closer = getattr(self._transport, 'aclose', None) or getattr(self._transport, 'close', None)
        if closer is not None:
            result = closer()
            if inspect.isawaitable(result):
                await result
    
    async def __aenter__(self) -> 'StorageClient':
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()


def create_transport(config: StorageClientConfig) -> Transport:
    """
    Create the default transport for a configuration.
    
    Uses ``RequestsTransport`` when transport-level retries are configured,
    ``HttpxTransport`` otherwise.
    """
    kwargs = {}
    if config.user_agent:
        kwargs['user_agent'] = config.user_agent
    if config.retry_attempts > 0:
        return RequestsTransport(
            config.base_url,
            timeout=config.timeout,
            verify_ssl=config.verify_ssl,
            retry_attempts=config.retry_attempts,
            **kwargs
        )
    return HttpxTransport(
        config.base_url,
        timeout=config.timeout,
        verify_ssl=config.verify_ssl,
        **kwargs
    )


def create_client(
    base_url: Optional[str] = None,
    config_path: Optional[str] = None,
    **overrides,
) -> StorageClient:
    """
    Create a storage client from configuration sources.
    
    Args:
        base_url: Server base URL (overrides file and environment)
        config_path: Optional JSON configuration file
        **overrides: Other StorageClientConfig fields
        
    Returns:
        StorageClient: Configured client
    """
    config = load_config(config_path, base_url=base_url, **overrides)
    return StorageClient(config=config)

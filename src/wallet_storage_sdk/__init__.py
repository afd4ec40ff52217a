"""
Wallet Storage Python SDK
Client for Wallet Storage servers with HTTP Signature authorization
"""

from .version import __version__
from .exceptions import (
    WalletStorageSDKError,
    ValidationError,
    AddressParseError,
    Ed25519KeyError,
    SigningError,
    ShapeValidationError,
    TransportFailureError,
    NotFoundError,
    UnauthorizedError,
)
from .addressing import (
    is_urn_uuid,
    parse_urn_uuid,
    parse_resource_path,
    ParsedUrnUuid,
    ParsedResourcePath,
    StorageURLPath,
    is_did_key,
    get_controller_of_did_key_verification_method,
)
from .activitypub import (
    ACTIVITYPUB_MEDIA_TYPE,
    ACTIVITYPUB_MEDIA_TYPE_SANS_WHITESPACE,
    is_valid_activitypub_media_type,
)
from .signing import (
    Signer,
    HttpMethod,
    HttpSignatureConfig,
    create_signing_config,
    create_http_signature_authorization,
    sign_headers,
    verify_http_signature_authorization,
)
from .crypto import Ed25519Signer
from .http_clients import (
    Blob,
    TransportResponse,
    StorageResponse,
    NotFoundResponse,
    UnauthorizedResponse,
    Transport,
    HttpxTransport,
    RequestsTransport,
)
from .collection import (
    CollectionItem,
    CollectionGetResponseBody,
    fetch_collection,
    iterate_collection_items,
)
from .config import StorageClientConfig, load_config
from .client import (
    StorageClient,
    Space,
    Resource,
    create_client,
    create_transport,
)

# Public API exports
__all__ = [
    '__version__',
    # Exceptions
    'WalletStorageSDKError',
    'ValidationError',
    'AddressParseError',
    'Ed25519KeyError',
    'SigningError',
    'ShapeValidationError',
    'TransportFailureError',
    'NotFoundError',
    'UnauthorizedError',
    # Addressing
    'is_urn_uuid',
    'parse_urn_uuid',
    'parse_resource_path',
    'ParsedUrnUuid',
    'ParsedResourcePath',
    'StorageURLPath',
    'is_did_key',
    'get_controller_of_did_key_verification_method',
    # ActivityPub
    'ACTIVITYPUB_MEDIA_TYPE',
    'ACTIVITYPUB_MEDIA_TYPE_SANS_WHITESPACE',
    'is_valid_activitypub_media_type',
    # Request Signing
    'Signer',
    'HttpMethod',
    'HttpSignatureConfig',
    'create_signing_config',
    'create_http_signature_authorization',
    'sign_headers',
    'verify_http_signature_authorization',
    'Ed25519Signer',
    # HTTP
    'Blob',
    'TransportResponse',
    'StorageResponse',
    'NotFoundResponse',
    'UnauthorizedResponse',
    'Transport',
    'HttpxTransport',
    'RequestsTransport',
    # Collections
    'CollectionItem',
    'CollectionGetResponseBody',
    'fetch_collection',
    'iterate_collection_items',
    # Configuration
    'StorageClientConfig',
    'load_config',
    # Client
    'StorageClient',
    'Space',
    'Resource',
    'create_client',
    'create_transport',
]

"""
Wallet Storage Python SDK - Request Signing Module

HTTP Signature authorization for storage requests. The signature algorithm
itself is supplied by an injected ``Signer``.
"""

from .types import (
    HttpMethod,
    Signer,
    SignedRequestDescriptor,
    HttpSignatureResult,
    ParsedAuthorization,
    CREATED_COMPONENT,
    EXPIRES_COMPONENT,
    KEY_ID_COMPONENT,
    REQUEST_TARGET_COMPONENT,
    DEFAULT_COVERED_COMPONENTS,
)

from .signing_config import (
    HttpSignatureConfig,
    DEFAULT_SIGNING_CONFIG,
    DEFAULT_VALIDITY_SECONDS,
    DEFAULT_PLACEHOLDER_ORIGIN,
    create_signing_config,
    validate_signing_config,
)

from .http_signature import (
    build_request_target,
    build_signature_base,
    render_authorization,
    create_http_signature_authorization,
    sign_headers,
)

from .utils import (
    generate_timestamp,
    parse_request_target,
    normalize_header_name,
    merge_authorization,
)

from .verification import (
    VerificationResult,
    parse_authorization_header,
    verify_http_signature_authorization,
)

# Public API exports
__all__ = [
    # Types
    'HttpMethod',
    'Signer',
    'SignedRequestDescriptor',
    'HttpSignatureResult',
    'ParsedAuthorization',
    'CREATED_COMPONENT',
    'EXPIRES_COMPONENT',
    'KEY_ID_COMPONENT',
    'REQUEST_TARGET_COMPONENT',
    'DEFAULT_COVERED_COMPONENTS',
    # Configuration
    'HttpSignatureConfig',
    'DEFAULT_SIGNING_CONFIG',
    'DEFAULT_VALIDITY_SECONDS',
    'DEFAULT_PLACEHOLDER_ORIGIN',
    'create_signing_config',
    'validate_signing_config',
    # Signing
    'build_request_target',
    'build_signature_base',
    'render_authorization',
    'create_http_signature_authorization',
    'sign_headers',
    # Utilities
    'generate_timestamp',
    'parse_request_target',
    'normalize_header_name',
    'merge_authorization',
    # Verification
    'VerificationResult',
    'parse_authorization_header',
    'verify_http_signature_authorization',
]

"""
Wallet Storage Python SDK - Addressing Module

Parsing and construction of urn:uuid space identifiers, storage paths and
did:key identifiers.
"""

from .urn_uuid import (
    URN_UUID_PREFIX,
    ParsedUrnUuid,
    is_urn_uuid,
    parse_urn_uuid,
    urn_uuid_from_uuid,
)

from .paths import (
    ParsedResourcePath,
    StorageURLPath,
    parse_resource_path,
    space_path_for_id,
    normalize_resource_segment,
)

from .did_key import (
    is_did_key,
    get_controller_of_did_key_verification_method,
    did_key_from_public_key,
    verification_method_id_for_public_key,
    public_key_from_did_key,
)

__all__ = [
    'URN_UUID_PREFIX',
    'ParsedUrnUuid',
    'is_urn_uuid',
    'parse_urn_uuid',
    'urn_uuid_from_uuid',
    'ParsedResourcePath',
    'StorageURLPath',
    'parse_resource_path',
    'space_path_for_id',
    'normalize_resource_segment',
    'is_did_key',
    'get_controller_of_did_key_verification_method',
    'did_key_from_public_key',
    'verification_method_id_for_public_key',
    'public_key_from_did_key',
]

"""
Tools for dealing with did:key URIs

Only syntactic handling is provided: no DID resolution beyond decoding the
public key embedded in a did:key identifier.
See https://w3c-ccg.github.io/did-method-key/
"""

import re
from typing import Any

from multiformats import multibase, multicodec

from ..exceptions import ValidationError

DID_KEY_PREFIX = "did:key:"
ED25519_PUB_CODEC = "ed25519-pub"

_DID_KEY_PATTERN = re.compile(r'^did:key:([^:#]+)$')


def is_did_key(value: Any) -> bool:
    """Check whether the value is a did:key DID string (without fragment)."""
    return isinstance(value, str) and bool(_DID_KEY_PATTERN.match(value))


def get_controller_of_did_key_verification_method(verification_method: str) -> str:
    """
    Get the controller DID of a did:key verification method id.
    
    A did:key verification method id looks like ``did:key:{mb}#{mb}``; the
    controller is the part before the fragment.
    
    Raises:
        ValidationError: If the verification method id is not a did:key
    """
    did = verification_method.split('#', 1)[0] if isinstance(verification_method, str) else None
    if not is_did_key(did):
        raise ValidationError(
            "unable to determine did:key from did:key verificationMethod id",
            "INVALID_DID_KEY",
            {"verification_method": verification_method}
        )
    return did


def did_key_from_public_key(public_key: bytes) -> str:
    """Build the did:key DID for a raw Ed25519 public key."""
    multikey = multicodec.wrap(ED25519_PUB_CODEC, public_key)
    return f"{DID_KEY_PREFIX}{multibase.encode(multikey, 'base58btc')}"


def verification_method_id_for_public_key(public_key: bytes) -> str:
    """Build the ``did:key:{mb}#{mb}`` verification method id for a raw Ed25519 public key."""
    did = did_key_from_public_key(public_key)
    return f"{did}#{did[len(DID_KEY_PREFIX):]}"


def public_key_from_did_key(did_or_verification_method: str) -> bytes:
    """
    Decode the raw Ed25519 public key embedded in a did:key.
    
    Accepts either a DID or a verification method id.
    
    Raises:
        ValidationError: If the value is not an Ed25519 did:key
    """
    did = get_controller_of_did_key_verification_method(did_or_verification_method)
    try:
        codec, raw = multicodec.unwrap(multibase.decode(did[len(DID_KEY_PREFIX):]))
    except Exception as e:
        raise ValidationError(
            f"unable to decode did:key: {e}",
            "INVALID_DID_KEY",
            {"did": did}
        ) from e
    if codec.name != ED25519_PUB_CODEC:
        raise ValidationError(
            f"unsupported did:key codec: {codec.name}",
            "UNSUPPORTED_DID_KEY_CODEC",
            {"did": did}
        )
    return bytes(raw)

"""
Wallet Storage Python SDK - Crypto Module

Ed25519 signing capability for HTTP Signature authorization.
"""

from .ed25519 import (
    Ed25519Signer,
    verify_signature,
    ED25519_PRIVATE_KEY_LENGTH,
    ED25519_PUBLIC_KEY_LENGTH,
    ED25519_SIGNATURE_LENGTH,
)

__all__ = [
    'Ed25519Signer',
    'verify_signature',
    'ED25519_PRIVATE_KEY_LENGTH',
    'ED25519_PUBLIC_KEY_LENGTH',
    'ED25519_SIGNATURE_LENGTH',
]

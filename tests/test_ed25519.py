"""
Tests for the Ed25519 signer
"""

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ec import SECP256R1, generate_private_key
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from wallet_storage_sdk.addressing.did_key import is_did_key, public_key_from_did_key
from wallet_storage_sdk.crypto.ed25519 import (
    ED25519_SIGNATURE_LENGTH,
    Ed25519Signer,
    verify_signature,
)
from wallet_storage_sdk.exceptions import Ed25519KeyError, ValidationError
from wallet_storage_sdk.signing.types import Signer


class TestEd25519Signer:
    """Test the Ed25519Signer class"""
    
    def setup_method(self):
        """Set up test fixtures"""
        self.signer = Ed25519Signer.generate()
    
    def test_is_a_signer(self):
        assert isinstance(self.signer, Signer)
    
    def test_id_is_did_key_verification_method(self):
        did, fragment = self.signer.id.split("#")
        assert is_did_key(did)
        assert did == f"did:key:{fragment}"
        assert self.signer.controller == did
        assert public_key_from_did_key(self.signer.id) == self.signer.public_key
    
    def test_sign_and_verify(self):
        message = b"(created): 1\n(expires): 31"
        signature = self.signer.sign(message)
        assert len(signature) == ED25519_SIGNATURE_LENGTH
        assert verify_signature(self.signer.public_key, message, signature)
        assert not verify_signature(self.signer.public_key, message + b"x", signature)
    
    def test_verify_rejects_malformed_inputs(self):
        signature = self.signer.sign(b"data")
        assert not verify_signature(b"short", b"data", signature)
        assert not verify_signature(self.signer.public_key, b"data", signature[:10])
    
    def test_distinct_keys(self):
        assert Ed25519Signer.generate().id != self.signer.id
    
    def test_from_private_bytes_is_deterministic(self):
        raw = bytes(range(1, 33))
        assert Ed25519Signer.from_private_bytes(raw).id == Ed25519Signer.from_private_bytes(raw).id
    
    def test_from_private_bytes_validation(self):
        with pytest.raises(ValidationError):
            Ed25519Signer.from_private_bytes(b"short")
        with pytest.raises(ValidationError):
            Ed25519Signer.from_private_bytes(b"\x00" * 32)
        with pytest.raises(ValidationError):
            Ed25519Signer.from_private_bytes("not bytes")
    
    def test_requires_ed25519_key(self):
        with pytest.raises(Ed25519KeyError):
            Ed25519Signer("not a key")


class TestKeyLoading:
    """Test loading signers from key files"""
    
    def test_pem_round_trip(self, tmp_path):
        signer = Ed25519Signer.generate()
        key_file = tmp_path / "id.pem"
        key_file.write_bytes(signer.to_pem())
        assert Ed25519Signer.from_key_file(key_file).id == signer.id
    
    def test_openssh_key(self, tmp_path):
        private_key = Ed25519PrivateKey.generate()
        key_file = tmp_path / "id_ed25519"
        key_file.write_bytes(private_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.OpenSSH,
            encryption_algorithm=serialization.NoEncryption()
        ))
        assert Ed25519Signer.from_key_file(str(key_file)).id == Ed25519Signer(private_key).id
    
    def test_missing_file(self, tmp_path):
        with pytest.raises(Ed25519KeyError) as exc_info:
            Ed25519Signer.from_key_file(tmp_path / "missing.pem")
        assert exc_info.value.error_code == "KEY_FILE_UNREADABLE"
    
    def test_garbage_key_data(self):
        with pytest.raises(Ed25519KeyError) as exc_info:
            Ed25519Signer.from_key_data(b"not a key")
        assert exc_info.value.error_code == "KEY_LOAD_FAILED"
    
    def test_wrong_key_type(self):
        pem = generate_private_key(SECP256R1()).private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption()
        )
        with pytest.raises(Ed25519KeyError) as exc_info:
            Ed25519Signer.from_key_data(pem)
        assert exc_info.value.error_code == "UNSUPPORTED_KEY_TYPE"

"""
Test suite for HTTP Signature request signing

Covers configuration, signature base construction, Authorization header
rendering and header merging.
"""

import asyncio

import pytest

from wallet_storage_sdk.crypto.ed25519 import Ed25519Signer, verify_signature
from wallet_storage_sdk.exceptions import SigningError
from wallet_storage_sdk.signing import (
    DEFAULT_COVERED_COMPONENTS,
    HttpMethod,
    HttpSignatureConfig,
    create_http_signature_authorization,
    create_signing_config,
    parse_authorization_header,
    sign_headers,
)
from wallet_storage_sdk.signing.http_signature import build_request_target
from wallet_storage_sdk.signing.utils import merge_authorization, parse_request_target, to_base64


class StaticSigner:
    """Signer returning a fixed signature"""
    
    def __init__(self, id="did:key:z6MkTest#z6MkTest", signature=b"\x01" * 64):
        self.id = id
        self.signature = signature
        self.signed = []
    
    def sign(self, data):
        self.signed.append(data)
        return self.signature


class AsyncSigner(StaticSigner):
    async def sign(self, data):
        await asyncio.sleep(0)
        return super().sign(data)


class FailingSigner(StaticSigner):
    def sign(self, data):
        raise RuntimeError("hardware key unavailable")


class TestSigningConfig:
    """Test signing configuration"""
    
    def test_default_config(self):
        config = HttpSignatureConfig()
        assert config.covered_components == DEFAULT_COVERED_COMPONENTS
        assert config.validity_seconds == 30
        assert config.algorithm is None
    
    def test_create_signing_config(self):
        config = create_signing_config(validity_seconds=120, algorithm="ed25519", timestamp_generator=lambda: 5)
        assert config.validity_seconds == 120
        assert config.algorithm == "ed25519"
        assert config.now() == 5
    
    def test_invalid_validity(self):
        with pytest.raises(SigningError) as exc_info:
            HttpSignatureConfig(validity_seconds=0)
        assert exc_info.value.error_code == "INVALID_CONFIG"
    
    def test_empty_components(self):
        with pytest.raises(SigningError):
            HttpSignatureConfig(covered_components=())
    
    def test_repeated_components(self):
        with pytest.raises(SigningError):
            HttpSignatureConfig(covered_components=("(created)", "(created)"))
    
    def test_invalid_placeholder_origin(self):
        with pytest.raises(SigningError):
            HttpSignatureConfig(placeholder_origin="not a url")


class TestRequestTarget:
    """Test (request-target) construction"""
    
    def test_lowercases_method(self):
        assert build_request_target(HttpMethod.PUT, "https://example.example/space/abc") == "put /space/abc"
        assert build_request_target("DELETE", "https://example.example/space/abc") == "delete /space/abc"
    
    def test_keeps_query(self):
        assert parse_request_target("https://example.example/space/abc?x=1") == "/space/abc?x=1"
    
    def test_host_is_not_covered(self):
        a = build_request_target("GET", "https://one.example/space/abc")
        b = build_request_target("GET", "https://two.example/space/abc")
        assert a == b
    
    def test_relative_url_rejected(self):
        with pytest.raises(SigningError):
            parse_request_target("/space/abc")
    
    def test_percent_encodes_path(self):
        target = parse_request_target("https://example.example/space/abc/my notes/\u00fc.txt")
        assert target == "/space/abc/my%20notes/%C3%BC.txt"
    
    def test_existing_escapes_kept(self):
        assert parse_request_target("https://example.example/space/abc/a%20b") == "/space/abc/a%20b"
    
    def test_percent_encodes_query(self):
        assert parse_request_target("https://example.example/space/abc?q=a b") == "/space/abc?q=a%20b"
    
    def test_encoded_and_raw_targets_match(self):
        raw = build_request_target("PUT", "https://example.example/space/abc/my notes")
        encoded = build_request_target("PUT", "https://example.example/space/abc/my%20notes")
        assert raw == encoded == "put /space/abc/my%20notes"


class TestCreateAuthorization:
    """Test Authorization header creation"""
    
    def setup_method(self):
        """Set up test fixtures"""
        self.config = create_signing_config(timestamp_generator=lambda: 1000)
    
    @pytest.mark.asyncio
    async def test_signature_base(self):
        signer = StaticSigner()
        result = await create_http_signature_authorization(signer, "PUT", "/space/abc", config=self.config)
        
        expected = "\n".join([
            "(created): 1000",
            "(expires): 1030",
            f"(key-id): {signer.id}",
            "(request-target): put /space/abc",
        ])
        assert result.signature_base == expected
        assert signer.signed == [expected.encode('utf-8')]
    
    @pytest.mark.asyncio
    async def test_authorization_format(self):
        signer = StaticSigner()
        result = await create_http_signature_authorization(signer, HttpMethod.GET, "/space/abc", config=self.config)
        
        assert result.authorization == (
            f'Signature keyId="{signer.id}",created=1000,expires=1030,'
            f'headers="(created) (expires) (key-id) (request-target)",'
            f'signature="{to_base64(signer.signature)}"'
        )
        parsed = parse_authorization_header(result.authorization)
        assert parsed.key_id == signer.id
        assert parsed.created == 1000
        assert parsed.expires == 1030
        assert parsed.headers == list(DEFAULT_COVERED_COMPONENTS)
        assert parsed.signature == signer.signature
        assert parsed.algorithm is None
    
    @pytest.mark.asyncio
    async def test_algorithm_parameter(self):
        config = create_signing_config(algorithm="ed25519", timestamp_generator=lambda: 1000)
        result = await create_http_signature_authorization(StaticSigner(), "GET", "/space/abc", config=config)
        assert 'algorithm="ed25519"' in result.authorization
        assert parse_authorization_header(result.authorization).algorithm == "ed25519"
    
    @pytest.mark.asyncio
    async def test_validity_window(self):
        config = create_signing_config(validity_seconds=300, timestamp_generator=lambda: 1000)
        result = await create_http_signature_authorization(StaticSigner(), "GET", "/space/abc", config=config)
        assert result.created == 1000
        assert result.expires == 1300
    
    @pytest.mark.asyncio
    async def test_explicit_created(self):
        result = await create_http_signature_authorization(
            StaticSigner(), "GET", "/space/abc", config=self.config, created=50
        )
        assert result.created == 50
        assert result.expires == 80
    
    @pytest.mark.asyncio
    async def test_uncovered_headers_ignored(self):
        signer = StaticSigner()
        plain = await create_http_signature_authorization(signer, "PUT", "/space/abc", config=self.config)
        with_headers = await create_http_signature_authorization(
            signer, "PUT", "/space/abc",
            headers={"content-type": "text/plain", "x-extra": "1"},
            config=self.config,
        )
        assert plain.signature_base == with_headers.signature_base
    
    @pytest.mark.asyncio
    async def test_covered_header_included(self):
        config = HttpSignatureConfig(
            covered_components=DEFAULT_COVERED_COMPONENTS + ("content-type",),
            timestamp_generator=lambda: 1000,
        )
        result = await create_http_signature_authorization(
            StaticSigner(), "PUT", "/space/abc", headers={"Content-Type": "text/plain"}, config=config
        )
        assert result.signature_base.endswith("\ncontent-type: text/plain")
    
    @pytest.mark.asyncio
    async def test_missing_covered_header(self):
        config = HttpSignatureConfig(
            covered_components=DEFAULT_COVERED_COMPONENTS + ("digest",),
            timestamp_generator=lambda: 1000,
        )
        with pytest.raises(SigningError) as exc_info:
            await create_http_signature_authorization(StaticSigner(), "PUT", "/space/abc", config=config)
        assert exc_info.value.error_code == "MISSING_REQUIRED_HEADER"
    
    @pytest.mark.asyncio
    async def test_absolute_url_host_ignored(self):
        signer = StaticSigner()
        a = await create_http_signature_authorization(signer, "GET", "https://data.pub/space/abc", config=self.config)
        b = await create_http_signature_authorization(signer, "GET", "/space/abc", config=self.config)
        assert a.signature_base == b.signature_base
    
    @pytest.mark.asyncio
    async def test_async_signer(self):
        signer = AsyncSigner()
        result = await create_http_signature_authorization(signer, "GET", "/space/abc", config=self.config)
        assert parse_authorization_header(result.authorization).signature == signer.signature
    
    @pytest.mark.asyncio
    async def test_signer_failure(self):
        with pytest.raises(SigningError) as exc_info:
            await create_http_signature_authorization(FailingSigner(), "GET", "/space/abc", config=self.config)
        assert exc_info.value.error_code == "SIGNING_FAILED"
        assert isinstance(exc_info.value.__cause__, RuntimeError)
    
    @pytest.mark.asyncio
    async def test_signer_returning_non_bytes(self):
        with pytest.raises(SigningError):
            await create_http_signature_authorization(
                StaticSigner(signature="not bytes"), "GET", "/space/abc", config=self.config
            )
    
    @pytest.mark.asyncio
    async def test_empty_signer_id(self):
        with pytest.raises(SigningError) as exc_info:
            await create_http_signature_authorization(StaticSigner(id=""), "GET", "/space/abc", config=self.config)
        assert exc_info.value.error_code == "INVALID_KEY_ID"
    
    @pytest.mark.asyncio
    async def test_unsupported_method(self):
        with pytest.raises(SigningError) as exc_info:
            await create_http_signature_authorization(StaticSigner(), "PATCH", "/space/abc", config=self.config)
        assert exc_info.value.error_code == "INVALID_METHOD"
    
    @pytest.mark.asyncio
    async def test_ed25519_signature_verifies(self):
        signer = Ed25519Signer.generate()
        result = await create_http_signature_authorization(signer, "PUT", "/space/abc", config=self.config)
        signature = parse_authorization_header(result.authorization).signature
        assert verify_signature(signer.public_key, result.signature_base.encode('utf-8'), signature)


class TestSignHeaders:
    """Test header signing used by storage operations"""
    
    @pytest.mark.asyncio
    async def test_without_signer(self):
        headers = {"content-type": "text/plain"}
        signed = await sign_headers("PUT", "/space/abc", headers)
        assert signed == headers
        assert signed is not headers
    
    @pytest.mark.asyncio
    async def test_with_signer(self):
        signer = StaticSigner()
        signed = await sign_headers("PUT", "/space/abc", {"content-type": "text/plain"}, signer=signer)
        assert signed["content-type"] == "text/plain"
        assert signed["authorization"].startswith(f'Signature keyId="{signer.id}"')
    
    @pytest.mark.asyncio
    async def test_replaces_caller_authorization(self):
        signed = await sign_headers("GET", "/space/abc", {"Authorization": "Bearer abc"}, signer=StaticSigner())
        assert "Authorization" not in signed
        assert signed["authorization"].startswith("Signature ")
    
    def test_merge_authorization_none(self):
        headers = {"Authorization": "Bearer abc"}
        assert merge_authorization(headers, None) == headers

"""
Tests for the httpx and requests transports
"""

import httpx
import pytest
import requests
from unittest.mock import Mock

from wallet_storage_sdk.client import StorageClient
from wallet_storage_sdk.crypto.ed25519 import Ed25519Signer
from wallet_storage_sdk.exceptions import TransportFailureError, ValidationError
from wallet_storage_sdk.http_clients import Blob, HttpxTransport, RequestsTransport
from wallet_storage_sdk.signing import verify_http_signature_authorization


class TestHttpxTransport:
    """Test the httpx-backed transport"""
    
    def setup_method(self):
        """Set up test fixtures"""
        self.requests = []
    
    def make_transport(self, handler, base_url="https://storage.example/api/"):
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return HttpxTransport(base_url, client=client)
    
    @pytest.mark.asyncio
    async def test_request(self):
        def handler(request):
            self.requests.append(request)
            return httpx.Response(200, headers={"content-type": "text/plain"}, content=b"hi")
        
        transport = self.make_transport(handler)
        response = await transport(
            "/space/abc", method="PUT", headers={"authorization": "Signature x"}, body=b"data"
        )
        await transport.aclose()
        
        assert response.status == 200
        assert response.content == b"hi"
        assert ("content-type", "text/plain") in response.headers
        
        sent = self.requests[0]
        # paths resolve against the server root
        assert str(sent.url) == "https://storage.example/space/abc"
        assert sent.method == "PUT"
        assert sent.headers["authorization"] == "Signature x"
        assert sent.content == b"data"
    
    @pytest.mark.asyncio
    async def test_error_status_is_not_raised(self):
        transport = self.make_transport(lambda request: httpx.Response(404))
        response = await transport("/space/abc", method="GET", headers={})
        assert response.status == 404
        assert not response.ok
    
    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)
        
        transport = self.make_transport(handler)
        with pytest.raises(TransportFailureError) as exc_info:
            await transport("/space/abc", method="GET", headers={})
        assert exc_info.value.error_code == "TIMEOUT"
    
    @pytest.mark.asyncio
    async def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)
        
        transport = self.make_transport(handler)
        with pytest.raises(TransportFailureError) as exc_info:
            await transport("/space/abc", method="GET", headers={})
        assert exc_info.value.error_code == "CONNECTION_ERROR"
    
    def test_invalid_base_url(self):
        with pytest.raises(ValidationError):
            HttpxTransport("not-a-url")


class TestRequestsTransport:
    """Test the requests-backed transport"""
    
    def setup_method(self):
        """Set up test fixtures"""
        self.session = Mock(spec=requests.Session)
        self.transport = RequestsTransport("https://storage.example", timeout=5, session=self.session)
    
    @pytest.mark.asyncio
    async def test_request(self):
        mock_response = Mock()
        mock_response.status_code = 201
        mock_response.headers = {"Content-Type": "application/json"}
        mock_response.content = b"{}"
        mock_response.reason = "Created"
        self.session.request.return_value = mock_response
        
        response = await self.transport("/space/abc", method="POST", headers={"a": "b"}, body=b"x")
        
        assert response.status == 201
        assert response.headers == [("Content-Type", "application/json")]
        assert response.reason == "Created"
        self.session.request.assert_called_once_with(
            "POST",
            "https://storage.example/space/abc",
            headers={"a": "b"},
            data=b"x",
            timeout=5,
            verify=True,
        )
    
    @pytest.mark.asyncio
    async def test_timeout(self):
        self.session.request.side_effect = requests.exceptions.Timeout()
        with pytest.raises(TransportFailureError) as exc_info:
            await self.transport("/space/abc", method="GET", headers={})
        assert exc_info.value.error_code == "TIMEOUT"
    
    @pytest.mark.asyncio
    async def test_connection_error(self):
        self.session.request.side_effect = requests.exceptions.ConnectionError("refused")
        with pytest.raises(TransportFailureError) as exc_info:
            await self.transport("/space/abc", method="GET", headers={})
        assert exc_info.value.error_code == "CONNECTION_ERROR"
    
    def test_retry_adapter(self):
        transport = RequestsTransport("https://storage.example", retry_attempts=3)
        adapter = transport.session.get_adapter("https://storage.example/space/abc")
        assert adapter.max_retries.total == 3
        assert 503 in adapter.max_retries.status_forcelist
        transport.close()
    
    def test_negative_retries(self):
        with pytest.raises(ValidationError):
            RequestsTransport("https://storage.example", retry_attempts=-1)


class TestSignedRequestsOnTheWire:
    """Signatures must verify against the path as the server receives it"""
    
    @pytest.mark.asyncio
    async def test_resource_name_needing_escapes(self):
        sent = []
        
        def handler(request):
            sent.append(request)
            return httpx.Response(204)
        
        signer = Ed25519Signer.generate()
        transport = HttpxTransport(
            "https://storage.example",
            client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        )
        async with StorageClient(transport=transport) as client:
            resource = client.space("urn:uuid:abc", signer=signer).resource("my notes/ü.txt")
            response = await resource.put(Blob.from_text("hi"))
        await transport.aclose()
        
        assert response.status == 204
        request = sent[0]
        wire_path = request.url.raw_path.decode("ascii")
        assert wire_path == "/space/abc/my%20notes/%C3%BC.txt"
        
        result = verify_http_signature_authorization(request.headers["authorization"], request.method, wire_path)
        assert result.verified, result.reason
        assert result.key_id == signer.id

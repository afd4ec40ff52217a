"""
Verification of HTTP Signature Authorization headers

Rebuilds the signature base from the parameters carried in the header and
checks it against the signer's public key. Used by servers (and test
doubles of servers) that accept requests from this SDK.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Sequence, Union

from ..addressing.did_key import public_key_from_did_key
from ..crypto.ed25519 import verify_signature
from ..exceptions import SigningError, ValidationError
from .http_signature import build_signature_base
from .types import DEFAULT_COVERED_COMPONENTS, HttpMethod, ParsedAuthorization, SignedRequestDescriptor
from .utils import from_base64, generate_timestamp, resolve_url
from .signing_config import DEFAULT_PLACEHOLDER_ORIGIN

logger = logging.getLogger(__name__)

_PARAM_PATTERN = re.compile(r'(?P<name>[A-Za-z]+)=(?:"(?P<quoted>[^"]*)"|(?P<bare>[^,\s]+))')

PublicKeyResolver = Callable[[str], bytes]


@dataclass
class VerificationResult:
    """
    Outcome of verifying an Authorization header
    
    Attributes:
        verified: True if the signature is valid and within its validity window
        key_id: keyId from the header, when it could be parsed
        reason: Why verification failed, None on success
    """
    verified: bool
    key_id: Optional[str] = None
    reason: Optional[str] = None


class _VerifierView:
    """Minimal signer stand-in exposing only the id, for rebuilding the base."""
    
    def __init__(self, key_id: str):
        self.id = key_id
    
    def sign(self, data: bytes) -> bytes:
        raise SigningError("verification does not sign", "INVALID_OPERATION")


def parse_authorization_header(value: str) -> ParsedAuthorization:
    """
    Parse a ``Signature keyId="...",created=...,...`` Authorization value.
    
    Both quoted and bare created/expires values are accepted.
    
    Raises:
        SigningError: If the value is not a well-formed Signature authorization
    """
    if not isinstance(value, str) or not value.startswith("Signature "):
        raise SigningError(
            "Authorization is not an HTTP Signature",
            "INVALID_AUTHORIZATION",
            {"authorization": value}
        )
    
    params: Dict[str, str] = {}
    for match in _PARAM_PATTERN.finditer(value[len("Signature "):]):
        quoted = match.group('quoted')
        params[match.group('name')] = quoted if quoted is not None else match.group('bare')
    
    missing = [name for name in ('keyId', 'created', 'expires', 'headers', 'signature') if name not in params]
    if missing:
        raise SigningError(
            f"Authorization missing parameters: {', '.join(missing)}",
            "INVALID_AUTHORIZATION",
            {"missing": missing}
        )
    
    try:
        created = int(params['created'])
        expires = int(params['expires'])
    except ValueError as e:
        raise SigningError(
            f"Invalid created/expires in authorization: {e}",
            "INVALID_AUTHORIZATION",
            {"created": params['created'], "expires": params['expires']}
        ) from e
    
    return ParsedAuthorization(
        key_id=params['keyId'],
        created=created,
        expires=expires,
        headers=params['headers'].split(),
        signature=from_base64(params['signature']),
        algorithm=params.get('algorithm'),
    )


def verify_http_signature_authorization(
    authorization: str,
    method: Union[HttpMethod, str],
    location: str,
    headers: Optional[Dict[str, str]] = None,
    public_key_resolver: Optional[PublicKeyResolver] = None,
    now: Optional[int] = None,
    clock_skew_seconds: int = 0,
    placeholder_origin: str = DEFAULT_PLACEHOLDER_ORIGIN,
    required_components: Sequence[str] = DEFAULT_COVERED_COMPONENTS,
) -> VerificationResult:
    """
    Verify an Authorization header against a request.
    
    Args:
        authorization: Authorization header value
        method: HTTP method of the request
        location: Request path or URL
        headers: Request headers (for covered regular headers)
        public_key_resolver: Maps a keyId to raw Ed25519 public key bytes;
            defaults to decoding did:key identifiers
        now: Current unix time (defaults to the system clock)
        clock_skew_seconds: Tolerance applied to created and expires
        placeholder_origin: Origin used to resolve path-only locations
        required_components: Components the signature must cover; a signature
            leaving any of them out is rejected
        
    Returns:
        VerificationResult: Verification outcome
    """
    try:
        parsed = parse_authorization_header(authorization)
    except SigningError as e:
        return VerificationResult(verified=False, reason=e.message)
    
    covered = {name.lower() for name in parsed.headers}
    uncovered = [name for name in required_components if name.lower() not in covered]
    if uncovered:
        return VerificationResult(
            verified=False,
            key_id=parsed.key_id,
            reason=f"signature does not cover required components: {' '.join(uncovered)}"
        )
    
    now = generate_timestamp() if now is None else now
    if parsed.created > now + clock_skew_seconds:
        return VerificationResult(verified=False, key_id=parsed.key_id, reason="signature created in the future")
    if parsed.expires < now - clock_skew_seconds:
        return VerificationResult(verified=False, key_id=parsed.key_id, reason="signature expired")
    
    try:
        http_method = method if isinstance(method, HttpMethod) else HttpMethod(str(method).upper())
        descriptor = SignedRequestDescriptor(
            method=http_method,
            url=resolve_url(location, placeholder_origin),
            headers=dict(headers or {}),
            signer=_VerifierView(parsed.key_id),
            created=parsed.created,
            expires=parsed.expires,
        )
        signature_base = build_signature_base(descriptor, parsed.headers)
        public_key = (public_key_resolver or public_key_from_did_key)(parsed.key_id)
    except (SigningError, ValidationError, ValueError) as e:
        return VerificationResult(verified=False, key_id=parsed.key_id, reason=str(e))
    
    if not verify_signature(public_key, signature_base.encode('utf-8'), parsed.signature):
        logger.debug(f"Signature verification failed for keyId {parsed.key_id}")
        return VerificationResult(verified=False, key_id=parsed.key_id, reason="signature mismatch")
    
    return VerificationResult(verified=True, key_id=parsed.key_id)

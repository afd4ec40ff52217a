"""
HTTP Signature authorization for storage requests

Builds the canonical signature base over the covered pseudo-headers
``(created) (expires) (key-id) (request-target)``, signs it with the
injected signer and renders the ``Authorization: Signature ...`` value.
"""

import logging
from typing import Dict, Optional, Sequence, Union

from ..exceptions import SigningError
from .signing_config import DEFAULT_SIGNING_CONFIG, HttpSignatureConfig
from .types import (
    CREATED_COMPONENT,
    EXPIRES_COMPONENT,
    KEY_ID_COMPONENT,
    REQUEST_TARGET_COMPONENT,
    HttpMethod,
    HttpSignatureResult,
    SignedRequestDescriptor,
    Signer,
)
from .utils import (
    find_header,
    maybe_await,
    merge_authorization,
    normalize_header_name,
    parse_request_target,
    resolve_url,
    to_base64,
)

logger = logging.getLogger(__name__)


def build_request_target(method: Union[HttpMethod, str], url: str) -> str:
    """
    Build the (request-target) value: lower-cased method and the URL path.
    
    The URL's host is never part of the result.
    """
    method_value = method.value if isinstance(method, HttpMethod) else str(method)
    return f"{method_value.lower()} {parse_request_target(url)}"


def resolve_component_value(component: str, descriptor: SignedRequestDescriptor) -> str:
    """
    Resolve the value of one covered component for a request.
    
    Raises:
        SigningError: If the component is a header missing from the request
    """
    if component == CREATED_COMPONENT:
        return str(descriptor.created)
    if component == EXPIRES_COMPONENT:
        return str(descriptor.expires)
    if component == KEY_ID_COMPONENT:
        return descriptor.signer.id
    if component == REQUEST_TARGET_COMPONENT:
        return build_request_target(descriptor.method, descriptor.url)
    
    value = find_header(descriptor.headers, component)
    if value is None:
        raise SigningError(
            f"Covered header missing from request: {component}",
            "MISSING_REQUIRED_HEADER",
            {"component": component, "request_headers": list(descriptor.headers.keys())}
        )
    return value.strip()


def build_signature_base(
    descriptor: SignedRequestDescriptor,
    covered_components: Sequence[str],
) -> str:
    """
    Build the canonical signature base for a request.
    
    Each covered component becomes a ``name: value`` line, in the given order,
    joined with newlines. Headers present on the request but not covered are
    ignored.
    """
    lines = []
    for component in covered_components:
        name = normalize_header_name(component)
        lines.append(f"{name}: {resolve_component_value(name, descriptor)}")
    return "\n".join(lines)


def render_authorization(
    key_id: str,
    created: int,
    expires: int,
    covered_components: Sequence[str],
    signature: bytes,
    algorithm: Optional[str] = None,
) -> str:
    """Render the ``Signature ...`` Authorization header value."""
    params = [f'keyId="{key_id}"']
    if algorithm:
        params.append(f'algorithm="{algorithm}"')
    params.append(f"created={created}")
    params.append(f"expires={expires}")
    params.append(f'headers="{" ".join(covered_components)}"')
    params.append(f'signature="{to_base64(signature)}"')
    return "Signature " + ",".join(params)


async def create_http_signature_authorization(
    signer: Signer,
    method: Union[HttpMethod, str],
    url: str,
    headers: Optional[Dict[str, str]] = None,
    config: Optional[HttpSignatureConfig] = None,
    created: Optional[int] = None,
) -> HttpSignatureResult:
    """
    Sign a request and build its Authorization header value.
    
    Args:
        signer: Signer whose id becomes the keyId
        method: HTTP method
        url: Request URL or path; paths are resolved against the
            configured placeholder origin
        headers: Request headers
        config: Signing configuration
        created: Explicit created timestamp (defaults to now)
        
    Returns:
        HttpSignatureResult: Authorization value and the signed base
        
    Raises:
        SigningError: If the signer fails or the request cannot be signed
    """
    config = config or DEFAULT_SIGNING_CONFIG
    created = config.now() if created is None else created
    
    try:
        http_method = method if isinstance(method, HttpMethod) else HttpMethod(str(method).upper())
    except ValueError as e:
        raise SigningError(
            f"Unsupported HTTP method for signing: {method}",
            "INVALID_METHOD",
            {"method": str(method)}
        ) from e
    
    if not getattr(signer, 'id', None):
        raise SigningError("Signer id cannot be empty", "INVALID_KEY_ID")
    
    descriptor = SignedRequestDescriptor(
        method=http_method,
        url=resolve_url(url, config.placeholder_origin),
        headers=dict(headers or {}),
        signer=signer,
        created=created,
        expires=created + config.validity_seconds,
    )
    
    covered_components = [normalize_header_name(c) for c in config.covered_components]
    signature_base = build_signature_base(descriptor, covered_components)
    logger.debug(f"Signing {http_method.value} {parse_request_target(descriptor.url)} as {signer.id}")
    
    try:
        signature = await maybe_await(signer.sign(signature_base.encode('utf-8')))
    except Exception as e:
        raise SigningError(
            f"Signer failed to sign request: {e}",
            "SIGNING_FAILED",
            {"key_id": signer.id, "original_error": str(e)}
        ) from e
    
    if not isinstance(signature, (bytes, bytearray, memoryview)):
        raise SigningError(
            f"Signer returned {type(signature).__name__}, expected bytes",
            "SIGNING_FAILED",
            {"key_id": signer.id}
        )
    
    authorization = render_authorization(
        key_id=signer.id,
        created=descriptor.created,
        expires=descriptor.expires,
        covered_components=covered_components,
        signature=bytes(signature),
        algorithm=config.algorithm,
    )
    
    return HttpSignatureResult(
        authorization=authorization,
        signature_base=signature_base,
        key_id=signer.id,
        created=descriptor.created,
        expires=descriptor.expires,
        covered_components=covered_components,
    )


async def sign_headers(
    method: Union[HttpMethod, str],
    location: str,
    headers: Optional[Dict[str, str]] = None,
    signer: Optional[Signer] = None,
    config: Optional[HttpSignatureConfig] = None,
) -> Dict[str, str]:
    """
    Return the request headers with an Authorization header when a signer is given.
    
    Without a signer the headers are returned unchanged (as a copy) and the
    request goes out unsigned. Signing failures propagate.
    """
    headers = dict(headers or {})
    if signer is None:
        return headers
    result = await create_http_signature_authorization(
        signer=signer,
        method=method,
        url=location,
        headers=headers,
        config=config,
    )
    return merge_authorization(headers, result.authorization)

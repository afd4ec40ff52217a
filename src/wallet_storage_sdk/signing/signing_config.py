"""
Configuration for HTTP Signature authorization

The validity window and the covered components are parameters rather than
constants so servers with different clock tolerances can be targeted.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple
from urllib.parse import urlparse

from ..exceptions import SigningError
from .types import DEFAULT_COVERED_COMPONENTS, TimestampGenerator
from .utils import generate_timestamp

DEFAULT_VALIDITY_SECONDS = 30

# The host of this origin never reaches the signature base: only the
# request-target (method and path) is covered.
DEFAULT_PLACEHOLDER_ORIGIN = "https://example.example"


@dataclass
class HttpSignatureConfig:
    """
    Configuration for building signed requests
    
    Attributes:
        covered_components: Pseudo-headers covered by the signature, in order
        validity_seconds: Seconds between created and expires
        placeholder_origin: Origin used to build absolute URLs for path-only routes
        algorithm: Optional algorithm parameter to advertise in the header
        timestamp_generator: Optional custom "now" in unix seconds
    """
    covered_components: Tuple[str, ...] = DEFAULT_COVERED_COMPONENTS
    validity_seconds: int = DEFAULT_VALIDITY_SECONDS
    placeholder_origin: str = DEFAULT_PLACEHOLDER_ORIGIN
    algorithm: Optional[str] = None
    timestamp_generator: Optional[TimestampGenerator] = field(default=None, repr=False)
    
    def __post_init__(self):
        validate_signing_config(self)
    
    def now(self) -> int:
        """Current unix time according to this configuration."""
        return (self.timestamp_generator or generate_timestamp)()


def validate_signing_config(config: HttpSignatureConfig) -> None:
    """
    Validate signing configuration.
    
    Raises:
        SigningError: If configuration is invalid
    """
    if not config.covered_components:
        raise SigningError(
            "At least one covered component is required",
            "INVALID_CONFIG",
            {"covered_components": list(config.covered_components)}
        )
    
    if len(set(config.covered_components)) != len(config.covered_components):
        raise SigningError(
            "Covered components must not repeat",
            "INVALID_CONFIG",
            {"covered_components": list(config.covered_components)}
        )
    
    if not isinstance(config.validity_seconds, int) or config.validity_seconds <= 0:
        raise SigningError(
            "Signature validity must be a positive number of seconds",
            "INVALID_CONFIG",
            {"validity_seconds": config.validity_seconds}
        )
    
    parsed = urlparse(config.placeholder_origin)
    if not parsed.scheme or not parsed.netloc:
        raise SigningError(
            f"Invalid placeholder origin: {config.placeholder_origin}",
            "INVALID_CONFIG",
            {"placeholder_origin": config.placeholder_origin}
        )


DEFAULT_SIGNING_CONFIG = HttpSignatureConfig()


def create_signing_config(
    validity_seconds: int = DEFAULT_VALIDITY_SECONDS,
    algorithm: Optional[str] = None,
    timestamp_generator: Optional[TimestampGenerator] = None,
) -> HttpSignatureConfig:
    """
    Create a signing configuration with the default covered components.
    
    Args:
        validity_seconds: Seconds between created and expires
        algorithm: Optional algorithm parameter for the header
        timestamp_generator: Optional custom clock
        
    Returns:
        HttpSignatureConfig: Validated configuration
    """
    return HttpSignatureConfig(
        validity_seconds=validity_seconds,
        algorithm=algorithm,
        timestamp_generator=timestamp_generator,
    )

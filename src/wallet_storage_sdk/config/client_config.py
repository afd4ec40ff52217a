"""
Configuration management for storage clients

Settings come from defaults, an optional JSON file and environment
variables, in increasing order of precedence.
"""

import json
import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union
from urllib.parse import urlparse

from ..exceptions import ValidationError
from ..signing.signing_config import DEFAULT_VALIDITY_SECONDS, HttpSignatureConfig

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://data.pub"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Environment variable -> (config field, converter)
ENVIRONMENT_OVERRIDES = {
    'STORAGE_URL': ('base_url', str),
    'WALLET_STORAGE_URL': ('base_url', str),
    'WALLET_STORAGE_TIMEOUT': ('timeout', float),
    'WALLET_STORAGE_RETRY_ATTEMPTS': ('retry_attempts', int),
    'WALLET_STORAGE_SIGNATURE_VALIDITY': ('signature_validity_seconds', int),
    'WALLET_STORAGE_LOG_LEVEL': ('log_level', str),
}


@dataclass
class StorageClientConfig:
    """Configuration for a storage client connection."""
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30.0
    verify_ssl: bool = True
    retry_attempts: int = 0
    signature_validity_seconds: int = DEFAULT_VALIDITY_SECONDS
    log_level: str = "WARNING"
    user_agent: Optional[str] = None
    
    def __post_init__(self):
        """Validate client configuration."""
        if not self.base_url:
            raise ValidationError("Server base_url cannot be empty")
        
        parsed = urlparse(self.base_url)
        if not parsed.scheme or not parsed.netloc:
            raise ValidationError(f"Invalid server URL format: {self.base_url}")
        
        if self.timeout <= 0:
            raise ValidationError("Timeout must be positive")
        
        if self.retry_attempts < 0:
            raise ValidationError("Retry attempts must be non-negative")
        
        if self.signature_validity_seconds <= 0:
            raise ValidationError("Signature validity must be positive")
        
        self.log_level = self.log_level.upper()
        if self.log_level not in _LOG_LEVELS:
            raise ValidationError(f"Unknown log level: {self.log_level}")
    
    def signing_config(self) -> HttpSignatureConfig:
        """Signing configuration matching these settings."""
        return HttpSignatureConfig(validity_seconds=self.signature_validity_seconds)
    
    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def _read_config_file(path: Path) -> Dict[str, Any]:
    try:
        with open(path, 'r', encoding='utf-8') as fh:
            data = json.load(fh)
    except FileNotFoundError as e:
        raise ValidationError(f"Configuration file not found: {path}", "CONFIG_NOT_FOUND") from e
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON in configuration file {path}: {e}", "CONFIG_PARSE_ERROR") from e
    
    if not isinstance(data, dict):
        raise ValidationError(f"Configuration file {path} must contain a JSON object", "CONFIG_PARSE_ERROR")
    
    known = {f.name for f in fields(StorageClientConfig)}
    unknown = set(data) - known
    if unknown:
        raise ValidationError(
            f"Unknown configuration keys: {', '.join(sorted(unknown))}",
            "CONFIG_UNKNOWN_KEYS",
            {"unknown": sorted(unknown)}
        )
    return data


def load_config(
    path: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
    **overrides: Any,
) -> StorageClientConfig:
    """
    Load client configuration.
    
    Args:
        path: Optional JSON configuration file
        environ: Environment mapping (defaults to os.environ)
        **overrides: Explicit values, taking precedence over everything else
        
    Returns:
        StorageClientConfig: Validated configuration
        
    Raises:
        ValidationError: If the file or any value is invalid
    """
    values: Dict[str, Any] = {}
    if path is not None:
        values.update(_read_config_file(Path(path)))
        logger.debug(f"Loaded storage client configuration from {path}")
    
    environ = os.environ if environ is None else environ
    for variable, (name, convert) in ENVIRONMENT_OVERRIDES.items():
        if variable in environ:
            try:
                values[name] = convert(environ[variable])
            except ValueError as e:
                raise ValidationError(
                    f"Invalid value for {variable}: {environ[variable]}",
                    "CONFIG_ENV_INVALID"
                ) from e
    
    values.update({k: v for k, v in overrides.items() if v is not None})
    return StorageClientConfig(**values)

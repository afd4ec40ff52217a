"""
Configuration module for Wallet Storage Python SDK
"""

from .client_config import (
    StorageClientConfig,
    DEFAULT_BASE_URL,
    ENVIRONMENT_OVERRIDES,
    load_config,
)

__all__ = [
    'StorageClientConfig',
    'DEFAULT_BASE_URL',
    'ENVIRONMENT_OVERRIDES',
    'load_config',
]

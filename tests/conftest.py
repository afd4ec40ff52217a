"""
Shared fixtures for the Wallet Storage SDK test suite
"""

import pytest

from fake_storage import FakeStorageServer
from wallet_storage_sdk.client import StorageClient
from wallet_storage_sdk.crypto.ed25519 import Ed25519Signer


@pytest.fixture
def server():
    return FakeStorageServer()


@pytest.fixture
def client(server):
    return StorageClient(transport=server)


@pytest.fixture
def signer():
    return Ed25519Signer.generate()

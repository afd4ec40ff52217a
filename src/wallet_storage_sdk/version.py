"""Version information for the Wallet Storage Python SDK"""

__version__ = "0.1.0"

"""
Exception classes for Wallet Storage Python SDK
"""

from typing import Optional, Dict, Any


class WalletStorageSDKError(Exception):
    """Base exception for all Wallet Storage SDK errors"""
    
    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ValidationError(WalletStorageSDKError):
    """Exception raised for validation failures"""
    pass


class AddressParseError(ValidationError):
    """Exception raised when a urn:uuid or storage path cannot be parsed"""
    
    def __init__(self, message: str, error_code: str = "ADDRESS_PARSE_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class Ed25519KeyError(WalletStorageSDKError):
    """Exception raised for Ed25519 key generation, loading or validation errors"""
    pass


class SigningError(WalletStorageSDKError):
    """Exception raised when a request signature cannot be produced"""
    
    def __init__(self, message: str, error_code: str = "SIGNING_FAILED", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class ShapeValidationError(WalletStorageSDKError):
    """Exception raised when a response body does not have the expected structure"""
    
    def __init__(self, message: str, error_code: str = "SHAPE_MISMATCH", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class TransportFailureError(WalletStorageSDKError):
    """Exception raised for server communication errors"""
    
    def __init__(self, message: str, error_code: str = "TRANSPORT_FAILURE",
                 http_status: int = 0, response: Any = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)
        self.http_status = http_status
        self.response = response


class NotFoundError(TransportFailureError):
    """Exception raised when the server responds 404 Not Found"""
    
    def __init__(self, message: str, response: Any = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "NOT_FOUND", 404, response, details)


class UnauthorizedError(TransportFailureError):
    """Exception raised when the server responds 401 Unauthorized"""
    
    def __init__(self, message: str, response: Any = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "UNAUTHORIZED", 401, response, details)

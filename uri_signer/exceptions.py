"""
Custom exceptions for the URI signer library.
"""

from typing import Optional


class UriSignerError(Exception):
    """Base exception for URI signer errors."""
    pass


class MalformedURIError(UriSignerError):
    """Raised when a URI cannot be parsed or carries no token."""
    pass


class ExpiredLinkError(UriSignerError):
    """Raised when a signed URI is past its expiration time."""

    def __init__(self, message: str, expires_at: Optional[int] = None):
        super().__init__(message)
        self.expires_at = expires_at


class InvalidSignatureError(UriSignerError):
    """Raised when the token signature is empty or does not match."""
    pass


class InvalidArgumentError(UriSignerError):
    """Raised when a caller-supplied expiration is not a positive integer."""
    pass


class ConfigurationError(UriSignerError):
    """Raised when signer configuration is invalid."""
    pass


class UnsupportedRequestError(UriSignerError):
    """Raised when no adapter can reconstruct a URI from a request object."""
    pass

"""
URI Signer

Signs URIs with an expiring HMAC-SHA256 token carried in a query string
parameter, and verifies them later with the same secret.

Example usage:
    from uri_signer import UriSigner

    signer = UriSigner("your-secret-key", expiration=600)
    url = signer.sign("https://example.com/download?file=report.pdf")
    assert signer.check(url)
"""

from .adapters import RequestAdapter, RequestsAdapter, WSGIRequestAdapter, adapt_request
from .auth import SignedURIAuth
from .canonical import ParsedURI, build_uri, parse_uri
from .config import SignerConfig
from .exceptions import (
    UriSignerError,
    MalformedURIError,
    ExpiredLinkError,
    InvalidSignatureError,
    InvalidArgumentError,
    ConfigurationError,
    UnsupportedRequestError
)
from .constants import (
    DEFAULT_CONFIG,
    DEFAULT_EXPIRATION,
    DEFAULT_PARAMETER
)
from .result import VerificationResult, VerificationStatus
from .signer import UriSigner
from .token import decode_token, encode_token

__version__ = "1.0.0"
__all__ = [
    "UriSigner",
    "SignerConfig",
    "SignedURIAuth",
    "VerificationResult",
    "VerificationStatus",
    "ParsedURI",
    "parse_uri",
    "build_uri",
    "encode_token",
    "decode_token",
    "RequestAdapter",
    "RequestsAdapter",
    "WSGIRequestAdapter",
    "adapt_request",
    "UriSignerError",
    "MalformedURIError",
    "ExpiredLinkError",
    "InvalidSignatureError",
    "InvalidArgumentError",
    "ConfigurationError",
    "UnsupportedRequestError",
    "DEFAULT_CONFIG",
    "DEFAULT_EXPIRATION",
    "DEFAULT_PARAMETER"
]

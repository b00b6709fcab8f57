"""
URI signing and verification.

This module provides HMAC-SHA256 signing of URIs with an expiration
timestamp carried inside a single query string token.
"""

import base64
import hashlib
import hmac
import logging
import os
import time
from typing import Mapping, Optional, Union

from .adapters import adapt_request
from .canonical import ParsedURI, build_uri, parse_uri
from .config import SignerConfig
from .constants import ENV_SECRET, EXPIRATION_KEY
from .exceptions import ConfigurationError, InvalidArgumentError, MalformedURIError
from .result import VerificationResult, VerificationStatus
from .token import decode_token, encode_token

logger = logging.getLogger(__name__)


class UriSigner:
    """
    Signs URIs with an expiring HMAC token and verifies them.

    The secret and options are fixed at construction; instances hold no
    other state and are safe to share between threads.
    """

    __slots__ = ('_secret', '_config')

    def __init__(self, secret: Union[str, bytes], **config):
        """
        Initialize URI signer.

        Args:
            secret: HMAC secret shared by signer and verifier
            **config: Configuration options (parameter, expiration)
        """
        self._init(secret, SignerConfig.from_mapping(config))

    def _init(self, secret: Union[str, bytes], config: SignerConfig):
        if isinstance(secret, str):
            secret = secret.encode('utf-8')
        if not isinstance(secret, bytes) or not secret:
            raise ConfigurationError("secret cannot be empty")

        object.__setattr__(self, '_secret', secret)
        object.__setattr__(self, '_config', config)

    @classmethod
    def from_config(cls, secret: Union[str, bytes], config: SignerConfig) -> 'UriSigner':
        """Create a signer from an existing SignerConfig."""
        signer = cls.__new__(cls)
        signer._init(secret, config)
        return signer

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'UriSigner':
        """
        Create a signer from URI_SIGNER_* environment variables.

        Raises:
            ConfigurationError: If the secret is unset or an option is invalid
        """
        if environ is None:
            environ = os.environ

        secret = environ.get(ENV_SECRET)
        if not secret:
            raise ConfigurationError(f"{ENV_SECRET} is not set")

        return cls.from_config(secret, SignerConfig.from_env(environ))

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self):
        return f"<UriSigner parameter={self.parameter!r} expiration={self.expiration}>"

    @property
    def config(self) -> SignerConfig:
        return self._config

    @property
    def parameter(self) -> str:
        return self._config.parameter

    @property
    def expiration(self) -> int:
        return self._config.expiration

    def compute_digest(self, canonical: str) -> str:
        """
        Generate the HMAC-SHA256 digest of a canonical URI string.

        Returns:
            Base64-encoded 32 byte digest
        """
        mac = hmac.new(self._secret, canonical.encode('utf-8'), hashlib.sha256)
        return base64.b64encode(mac.digest()).decode('ascii')

    def _unsigned_params(self, parsed: ParsedURI) -> dict:
        return {key: value for key, value in parsed.params.items() if key != self.parameter}

    def sign(self, uri: str, expiration: Optional[int] = None) -> str:
        """
        Sign a URI.

        The token parameter is added (or replaced) in the query string and
        every other parameter is re-serialized sorted by key. A caller
        supplied "expiration" parameter is dropped, since that key only
        exists inside the digest.

        Args:
            uri: URI to sign
            expiration: Validity window in seconds, defaults to the
                configured expiration

        Returns:
            Signed URI

        Raises:
            MalformedURIError: If uri cannot be parsed
            InvalidArgumentError: If the validity window is not an integer >= 1
        """
        parsed = parse_uri(uri)

        duration = self.expiration if expiration is None else expiration
        if isinstance(duration, bool) or not isinstance(duration, int) or duration < 1:
            raise InvalidArgumentError(
                f"expiration must be an integer number of seconds larger than 0, got {duration!r}"
            )

        expires_at = int(time.time()) + duration

        params = self._unsigned_params(parsed)
        params.pop(EXPIRATION_KEY, None)
        signature = self.compute_digest(build_uri(parsed, {**params, EXPIRATION_KEY: expires_at}))
        params[self.parameter] = encode_token(expires_at, signature)

        logger.debug("Signed URI %s%s, expires at %d", parsed.host or '', parsed.path, expires_at)
        return build_uri(parsed, params)

    def verify(self, uri: str) -> VerificationResult:
        """
        Verify a signed URI.

        Args:
            uri: Signed URI, query parameters in any order

        Returns:
            VerificationResult that is OK or names the failure kind
        """
        try:
            parsed = parse_uri(uri)
        except MalformedURIError:
            return self._fail(None, VerificationStatus.MALFORMED_URI, "unparsable URI")

        token = parsed.params.get(self.parameter)
        if not token:
            return self._fail(parsed, VerificationStatus.MALFORMED_URI, "missing token")

        expires_at, signature = decode_token(token)

        if expires_at < int(time.time()):
            return self._fail(parsed, VerificationStatus.EXPIRED, f"expired at {expires_at}", expires_at)

        if not signature:
            return self._fail(parsed, VerificationStatus.INVALID_SIGNATURE, "no signature present", expires_at)

        params = self._unsigned_params(parsed)
        # Signed URIs never carry the digest-only expiration key
        if EXPIRATION_KEY in params:
            return self._fail(parsed, VerificationStatus.INVALID_SIGNATURE, "tampered", expires_at)

        params[EXPIRATION_KEY] = expires_at
        expected = self.compute_digest(build_uri(parsed, params))

        # Constant-time comparison to prevent timing attacks
        if not hmac.compare_digest(expected.encode('utf-8'), signature.encode('utf-8')):
            return self._fail(parsed, VerificationStatus.INVALID_SIGNATURE, "tampered", expires_at)

        return VerificationResult.success(expires_at)

    def _fail(self, parsed: Optional[ParsedURI], status: VerificationStatus, reason: str,
              expires_at: Optional[int] = None) -> VerificationResult:
        if parsed is None:
            logger.debug("URI verification failed: %s", reason)
        else:
            logger.debug("URI verification failed for %s%s: %s", parsed.host or '', parsed.path, reason)
        return VerificationResult.failure(status, reason, expires_at)

    def check(self, uri: str, throw_on_error: bool = False) -> bool:
        """
        Check that a URI carries a valid, unexpired token.

        Args:
            uri: Signed URI
            throw_on_error: Raise the classified failure instead of
                returning False

        Returns:
            True if the URI is valid

        Raises:
            MalformedURIError, ExpiredLinkError, InvalidSignatureError:
                Only when throw_on_error is set
        """
        result = self.verify(uri)
        if throw_on_error:
            result.raise_for_status()
        return result.ok

    def check_request(self, request, throw_on_error: bool = False) -> bool:
        """
        Check the URI of an inbound request.

        The URI is rebuilt from the request's raw components so the query
        string keeps the encoding it was received with.

        Args:
            request: WSGI environ, requests Request/PreparedRequest, or any
                object with a raw_uri() method
            throw_on_error: Raise the classified failure instead of
                returning False

        Raises:
            UnsupportedRequestError: If request is of an unsupported type
        """
        return self.check(adapt_request(request).raw_uri(), throw_on_error)

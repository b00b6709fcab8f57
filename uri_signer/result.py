"""
Verification outcome.
"""

import enum
from dataclasses import dataclass
from typing import Optional

from .exceptions import (
    ExpiredLinkError,
    InvalidSignatureError,
    MalformedURIError,
    UriSignerError,
)


class VerificationStatus(enum.Enum):
    OK = 'ok'
    MALFORMED_URI = 'malformed_uri'
    EXPIRED = 'expired'
    INVALID_SIGNATURE = 'invalid_signature'


_ERRORS = {
    VerificationStatus.MALFORMED_URI: MalformedURIError,
    VerificationStatus.INVALID_SIGNATURE: InvalidSignatureError,
}


@dataclass(frozen=True, repr=False)
class VerificationResult:
    """
    Tagged result of verifying a signed URI.

    Either OK or exactly one failure kind, with a human readable reason.
    """

    status: VerificationStatus
    reason: str = ''
    expires_at: Optional[int] = None

    @classmethod
    def success(cls, expires_at: int) -> 'VerificationResult':
        return cls(VerificationStatus.OK, expires_at=expires_at)

    @classmethod
    def failure(cls, status: VerificationStatus, reason: str,
                expires_at: Optional[int] = None) -> 'VerificationResult':
        return cls(status, reason, expires_at)

    @property
    def ok(self) -> bool:
        return self.status is VerificationStatus.OK

    def __bool__(self) -> bool:
        return self.ok

    @property
    def error(self) -> Optional[UriSignerError]:
        """The classified exception for a failure, None on success."""
        if self.ok:
            return None
        if self.status is VerificationStatus.EXPIRED:
            return ExpiredLinkError(self.reason, expires_at=self.expires_at)
        return _ERRORS[self.status](self.reason)

    def raise_for_status(self):
        """Raise the classified exception if verification failed."""
        error = self.error
        if error is not None:
            raise error

    def __repr__(self):
        if self.ok:
            return f"<VerificationResult ok expires_at={self.expires_at}>"
        return f"<VerificationResult {self.status.value}: {self.reason}>"

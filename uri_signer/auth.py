"""
Outbound request signing for requests.
"""

from typing import Optional

from requests.auth import AuthBase


class SignedURIAuth(AuthBase):
    """
    Sign the URL of every outgoing request.

    Example:
        session.get(url, auth=SignedURIAuth(signer, expiration=600))
    """

    def __init__(self, signer, expiration: Optional[int] = None):
        self.signer = signer
        self.expiration = expiration

    def __call__(self, r):
        r.url = self.signer.sign(r.url, self.expiration)
        return r

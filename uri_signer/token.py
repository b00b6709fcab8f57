"""
Token codec.

A token packs the expiration timestamp and the signature into one opaque,
URL-safe string: unpadded URL-safe base64 over compact JSON.
"""

import base64
import binascii
import json
from typing import Tuple

from .constants import TOKEN_FIELD_EXPIRATION, TOKEN_FIELD_SIGNATURE

# Returned by decode_token for anything it cannot read
DEGENERATE = (0, '')


def encode_token(expiration: int, signature: str) -> str:
    """
    Encode an expiration timestamp and signature into a token.

    Args:
        expiration: Unix timestamp after which the token is expired
        signature: Base64 HMAC digest

    Returns:
        URL-safe token string
    """
    payload = json.dumps(
        {TOKEN_FIELD_SIGNATURE: signature, TOKEN_FIELD_EXPIRATION: expiration},
        separators=(',', ':'),
        sort_keys=True,
    )
    return base64.urlsafe_b64encode(payload.encode('utf-8')).rstrip(b'=').decode('ascii')


def decode_token(token: str) -> Tuple[int, str]:
    """
    Decode a token into (expiration, signature).

    Never raises: malformed tokens decode to (0, ''), which callers treat as
    expired and unsigned.
    """
    try:
        raw = token.encode('ascii')
        raw += b'=' * (-len(raw) % 4)
        data = json.loads(base64.urlsafe_b64decode(raw).decode('utf-8'))
    except (AttributeError, UnicodeError, binascii.Error, ValueError):
        return DEGENERATE

    if not isinstance(data, dict):
        return DEGENERATE

    expiration = data.get(TOKEN_FIELD_EXPIRATION)
    signature = data.get(TOKEN_FIELD_SIGNATURE)
    if isinstance(expiration, bool) or not isinstance(expiration, int):
        return DEGENERATE
    if not isinstance(signature, str):
        return DEGENERATE

    return expiration, signature.strip()

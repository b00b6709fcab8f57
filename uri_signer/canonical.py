"""
URI canonicalization.

Splits a URI into its components and reassembles an arbitrary set of
components into a single deterministic string. Query parameters are always
emitted sorted by key, so the same logical URI serializes identically no
matter how its parameters were ordered on input. Signing and verification
both go through build_uri; any divergence here breaks every signature.
"""

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Tuple
from urllib.parse import parse_qsl, quote_plus, urlencode, urlsplit

from .exceptions import MalformedURIError


@dataclass(frozen=True)
class ParsedURI:
    """Components of a parsed URI. Absent components are None."""

    scheme: Optional[str] = None
    user: Optional[str] = None
    password: Optional[str] = None
    host: Optional[str] = None
    port: Optional[int] = None
    path: str = ''
    params: Dict[str, str] = field(default_factory=dict)
    fragment: Optional[str] = None


def _parse_port(port: str, uri: str) -> Optional[int]:
    if port == '':
        return None
    if not (port.isascii() and port.isdigit()) or int(port) > 65535:
        raise MalformedURIError(f"Invalid port in URI: {uri!r}")
    return int(port)


def _split_authority(netloc: str, uri: str) -> Tuple[Optional[str], Optional[str], str, Optional[int]]:
    """Split an authority into (user, password, host, port) without case folding."""
    user = password = None
    userinfo, at, hostinfo = netloc.rpartition('@')
    if at:
        user, colon, secret = userinfo.partition(':')
        password = secret if colon else None

    port = ''
    if hostinfo.startswith('['):
        end = hostinfo.find(']')
        if end == -1:
            raise MalformedURIError(f"Unbalanced IPv6 bracket in URI: {uri!r}")
        host, rest = hostinfo[:end + 1], hostinfo[end + 1:]
        if rest:
            if not rest.startswith(':'):
                raise MalformedURIError(f"Invalid authority in URI: {uri!r}")
            port = rest[1:]
    else:
        host, _, port = hostinfo.partition(':')
        if ']' in host:
            raise MalformedURIError(f"Unbalanced IPv6 bracket in URI: {uri!r}")

    return user, password, host, _parse_port(port, uri)


def parse_uri(uri: str) -> ParsedURI:
    """
    Parse a URI string into its components.

    Args:
        uri: URI to parse

    Returns:
        ParsedURI with the query decoded into a key/value dict (blank
        values kept, duplicate keys overwritten by the last occurrence)

    Raises:
        MalformedURIError: If the value cannot be parsed as a URI
    """
    if not isinstance(uri, str):
        raise MalformedURIError(f"URI must be a string, got {type(uri).__name__}")

    try:
        parts = urlsplit(uri)
    except ValueError as e:
        raise MalformedURIError(f"Unparsable URI {uri!r}: {e}") from e

    stripped = uri.strip()
    tail = stripped[len(parts.scheme) + 1:] if parts.scheme else stripped
    has_authority = bool(parts.netloc) or tail.startswith('//')

    try:
        params = dict(parse_qsl(parts.query, keep_blank_values=True, errors='strict'))
    except UnicodeDecodeError as e:
        raise MalformedURIError(f"Query of {uri!r} is not valid UTF-8: {e}") from e

    user = password = host = port = None
    if has_authority:
        user, password, host, port = _split_authority(parts.netloc, uri)

    return ParsedURI(
        scheme=parts.scheme or None,
        user=user,
        password=password,
        host=host,
        port=port,
        path=parts.path,
        params=params,
        fragment=parts.fragment if '#' in uri else None,
    )


def build_query(params: Mapping[str, object]) -> str:
    """Form-encode params sorted by key."""
    items = sorted(params.items(), key=lambda item: item[0])
    return urlencode(items, quote_via=quote_plus)


def build_uri(parsed: ParsedURI, params: Mapping[str, object]) -> str:
    """
    Reassemble a URI from its components, replacing its query with params.

    Args:
        parsed: Parsed URI supplying every component but the query
        params: Query parameters to emit, in any order

    Returns:
        scheme:[//[user[:password]@]host[:port]]path[?query][#fragment]
    """
    pieces = []
    if parsed.scheme:
        pieces.append(parsed.scheme + ':')

    if parsed.host is not None:
        pieces.append('//')
        if parsed.user is not None or parsed.password is not None:
            userinfo = parsed.user or ''
            if parsed.password is not None:
                userinfo += ':' + parsed.password
            pieces.append(userinfo + '@')
        pieces.append(parsed.host)
        if parsed.port is not None:
            pieces.append(f":{parsed.port}")

    pieces.append(parsed.path)

    query = build_query(params)
    if query:
        pieces.append('?' + query)

    if parsed.fragment is not None:
        pieces.append('#' + parsed.fragment)

    return ''.join(pieces)

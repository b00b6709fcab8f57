"""
Request adapters.

Rebuild the original absolute URI of a request from its raw components,
without any normalization that could reorder or re-encode the query string.
"""

from abc import ABC, abstractmethod
from typing import Mapping
from urllib.parse import quote

import requests

from .exceptions import UnsupportedRequestError

# RFC 3986 pchar characters, left unescaped when re-quoting a decoded path
_PATH_SAFE = "/:@!$&'()*+,;="


class RequestAdapter(ABC):
    """Base class for request adapters."""

    @abstractmethod
    def raw_uri(self) -> str:
        """Return the absolute URI exactly as the request carried it."""


class WSGIRequestAdapter(RequestAdapter):
    """
    Adapter for a WSGI environ.

    Uses the server-provided raw request target (RAW_URI or REQUEST_URI)
    when available, otherwise re-quotes SCRIPT_NAME and PATH_INFO as
    described in PEP 3333. QUERY_STRING is always used verbatim.
    """

    def __init__(self, environ: Mapping[str, str]):
        self.environ = environ

    def _host(self) -> str:
        environ = self.environ
        if environ.get('HTTP_HOST'):
            return environ['HTTP_HOST']

        host = environ.get('SERVER_NAME', '')
        port = str(environ.get('SERVER_PORT', ''))
        scheme = environ.get('wsgi.url_scheme', 'http')
        if port and (scheme, port) not in (('http', '80'), ('https', '443')):
            host += ':' + port
        return host

    def _path(self) -> str:
        environ = self.environ
        raw = environ.get('RAW_URI') or environ.get('REQUEST_URI')
        if raw:
            return raw.split('?', 1)[0]

        script_name = environ.get('SCRIPT_NAME', '').encode('latin-1')
        path_info = environ.get('PATH_INFO', '').encode('latin-1')
        return quote(script_name, safe=_PATH_SAFE) + quote(path_info, safe=_PATH_SAFE)

    def raw_uri(self) -> str:
        scheme = self.environ.get('wsgi.url_scheme', 'http')
        query = self.environ.get('QUERY_STRING', '')
        uri = f"{scheme}://{self._host()}{self._path()}"
        return f"{uri}?{query}" if query else uri


class RequestsAdapter(RequestAdapter):
    """Adapter for requests.Request and requests.PreparedRequest."""

    def __init__(self, request):
        self.request = request

    def raw_uri(self) -> str:
        request = self.request
        if isinstance(request, requests.Request):
            request = request.prepare()
        return request.url


def adapt_request(request) -> RequestAdapter:
    """
    Wrap a request object in a RequestAdapter.

    Raises:
        UnsupportedRequestError: If no adapter handles the request type
    """
    if isinstance(request, RequestAdapter):
        return request

    if isinstance(request, (requests.Request, requests.PreparedRequest)):
        return RequestsAdapter(request)

    if isinstance(request, Mapping):
        return WSGIRequestAdapter(request)

    if callable(getattr(request, 'raw_uri', None)):
        return request

    raise UnsupportedRequestError(f"Cannot reconstruct a URI from {type(request).__name__}")

# -*- coding: utf-8 -*-
"""
    faultproxy
    ~~~~~~~~~~
    Local HTTP forwarding proxy that injects latency and scripted
    failures in front of a real upstream service.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.

    .. spelling::

       http
       url
"""
from typing import List, Tuple, Optional

from .exception import HttpProtocolException
from ..common.utils import text_
from ..common.constants import (
    COLON, SLASH, ASTERISK, HTTPS_PROTO, DEFAULT_HTTP_PORT, DEFAULT_HTTPS_PORT,
    DEFAULT_ALLOWED_URL_SCHEMES,
)


class Url:
    """Minimal URL structure used for request line targets and the upstream base URL.

    Example:
    For an origin-form request line, url is like ``/`` or ``/get?key=value``
    For an asterisk-form request line, url is ``*``
    For an absolute-form request line or upstream, url is like ``https://httpbin.org/get``
    """

    def __init__(
            self,
            scheme: Optional[bytes] = None,
            hostname: Optional[bytes] = None,
            port: Optional[int] = None,
            remainder: Optional[bytes] = None,
    ) -> None:
        self.scheme: Optional[bytes] = scheme
        self.hostname: Optional[bytes] = hostname
        self.port: Optional[int] = port
        self.remainder: Optional[bytes] = remainder

    def __str__(self) -> str:
        url = ''
        if self.scheme:
            url += '{0}://'.format(text_(self.scheme))
        if self.hostname:
            url += text_(self.hostname)
        if self.port:
            url += ':{0}'.format(self.port)
        if self.remainder:
            url += text_(self.remainder)
        return url

    @property
    def netloc(self) -> bytes:
        """Host with explicit port, as sent within the ``Host`` header."""
        assert self.hostname
        if self.port:
            return self.hostname + COLON + str(self.port).encode()
        return self.hostname

    @property
    def effective_port(self) -> int:
        if self.port:
            return self.port
        return DEFAULT_HTTPS_PORT if self.scheme == HTTPS_PROTO else DEFAULT_HTTP_PORT

    @classmethod
    def from_bytes(cls, raw: bytes, allowed_url_schemes: Optional[List[bytes]] = None) -> 'Url':
        # Origin-form, including paths with an empty first segment,
        # and asterisk-form
        if raw[:1] == SLASH or raw == ASTERISK:
            return cls(remainder=raw)
        parts = raw.split(b'://', 1)
        if len(parts) != 2:
            raise HttpProtocolException('Invalid url %r' % raw)
        scheme, rest = parts[0].lower(), parts[1]
        if scheme not in (allowed_url_schemes or DEFAULT_ALLOWED_URL_SCHEMES):
            raise HttpProtocolException(
                'Invalid scheme received in the url %r' % raw,
            )
        parts = rest.split(SLASH, 1)
        host, port = Url._parse(parts[0])
        if not host:
            raise HttpProtocolException('Missing host in the url %r' % raw)
        return cls(
            scheme=scheme,
            hostname=host,
            port=port,
            remainder=None if len(parts) == 1 else (
                SLASH + parts[1]
            ),
        )

    @staticmethod
    def _parse(raw: bytes) -> Tuple[bytes, Optional[int]]:
        # [::1]:8080 style IPv6 literal
        if raw.startswith(b'['):
            host, _, rest = raw.partition(b']')
            host += b']'
            if rest.startswith(COLON):
                return host, Url._port(rest[1:], raw)
            return host, None
        parts = raw.split(COLON)
        if len(parts) == 1:
            return parts[0], None
        if len(parts) == 2:
            return parts[0], Url._port(parts[1], raw)
        raise HttpProtocolException('Invalid host %r' % raw)

    @staticmethod
    def _port(raw: bytes, url: bytes) -> int:
        try:
            port = int(raw)
        except ValueError:
            raise HttpProtocolException('Invalid port in %r' % url)
        if not 0 < port < 65536:
            raise HttpProtocolException('Invalid port in %r' % url)
        return port

# -*- coding: utf-8 -*-
"""
    faultproxy
    ~~~~~~~~~~
    Local HTTP forwarding proxy that injects latency and scripted
    failures in front of a real upstream service.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.

    .. spelling::

       upstream
"""
from typing import TYPE_CHECKING, Any

from .base import HttpProtocolException
from ..codes import httpStatusCodes
from ..responses import corsResponse
from ...common.utils import bytes_
from ...common.constants import PROXY_FAILED_PREFIX


if TYPE_CHECKING:   # pragma: no cover
    from ..parser import HttpParser


class UpstreamDispatchFailed(HttpProtocolException):
    """Exception raised when ``ForwarderPlugin`` could not obtain a response
    from the upstream server, e.g. DNS failure, refused connection,
    TLS failure or a configured timeout.

    Surfaced to the client as ``500`` with the error text, never retried."""

    def __init__(self, url: str, reason: str, **kwargs: Any):
        self.url: str = url
        self.reason: str = reason
        super().__init__('%s %s' % (self.__class__.__name__, reason), **kwargs)

    def response(self, _request: 'HttpParser') -> memoryview:
        return corsResponse(
            httpStatusCodes.INTERNAL_SERVER_ERROR,
            headers={
                b'Content-Type': b'text/plain; charset=utf-8',
            },
            body=PROXY_FAILED_PREFIX + bytes_(self.reason, errors='replace'),
        )

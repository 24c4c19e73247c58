# -*- coding: utf-8 -*-
"""
    faultproxy
    ~~~~~~~~~~
    Local HTTP forwarding proxy that injects latency and scripted
    failures in front of a real upstream service.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.
"""
from typing import TYPE_CHECKING, Any, Dict, Optional

from .base import HttpProtocolException
from ..responses import corsResponse


if TYPE_CHECKING:   # pragma: no cover
    from ..parser import HttpParser


class HttpRequestRejected(HttpProtocolException):
    """Generic exception that can be used to reject the client requests.

    Connections can either be dropped/closed or optionally an
    HTTP status code can be returned.  Returned responses always
    carry the CORS headers so that browsers can read them."""

    def __init__(
            self,
            status_code: Optional[int] = None,
            reason: Optional[bytes] = None,
            headers: Optional[Dict[bytes, bytes]] = None,
            body: Optional[bytes] = None,
            **kwargs: Any,
    ):
        self.status_code: Optional[int] = status_code
        self.reason: Optional[bytes] = reason
        self.headers: Optional[Dict[bytes, bytes]] = headers
        self.body: Optional[bytes] = body
        klass_name = self.__class__.__name__
        super().__init__(
            message='%s %r' % (klass_name, reason)
            if reason
            else '%s %s' % (klass_name, status_code),
            **kwargs,
        )

    def response(self, _request: 'HttpParser') -> Optional[memoryview]:
        if self.status_code:
            return corsResponse(
                self.status_code,
                reason=self.reason,
                headers=self.headers,
                body=self.body,
            )
        return None

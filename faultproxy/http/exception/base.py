# -*- coding: utf-8 -*-
"""
    faultproxy
    ~~~~~~~~~~
    Local HTTP forwarding proxy that injects latency and scripted
    failures in front of a real upstream service.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.

    .. spelling:word-list::

       http
"""
from typing import TYPE_CHECKING, Any, Optional


if TYPE_CHECKING:   # pragma: no cover
    from ..parser import HttpParser


class HttpProtocolException(Exception):
    """Top level :exc:`HttpProtocolException` exception class.

    All exceptions raised while a request travels through the pipeline
    MUST inherit :exc:`HttpProtocolException`.  Implement ``response()``
    to optionally return a custom response to the client.  When
    ``response()`` returns None, the client connection is simply closed.
    """

    def __init__(self, message: Optional[str] = None, **kwargs: Any) -> None:
        super().__init__(message or 'Reason unknown')

    def response(self, request: 'HttpParser') -> Optional[memoryview]:
        return None  # pragma: no cover

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
       iterable
"""
import http
from typing import Optional, NamedTuple


HttpStatusCodes = NamedTuple(
    'HttpStatusCodes', [
        # 1xx
        ('CONTINUE', int),
        # 2xx
        ('OK', int),
        ('NO_CONTENT', int),
        # 3xx
        ('NOT_MODIFIED', int),
        # 4xx
        ('BAD_REQUEST', int),
        ('NOT_FOUND', int),
        ('TOO_MANY_REQUESTS', int),
        # 5xx
        ('INTERNAL_SERVER_ERROR', int),
        ('BAD_GATEWAY', int),
        ('SERVICE_UNAVAILABLE', int),
        ('GATEWAY_TIMEOUT', int),
    ],
)

httpStatusCodes = HttpStatusCodes(
    100,
    200, 204,
    304,
    400, 404, 429,
    500, 502, 503, 504,
)

# Responses which never carry a message body
NO_BODY_STATUS_CODES = (
    httpStatusCodes.NO_CONTENT,
    httpStatusCodes.NOT_MODIFIED,
)


def reason_phrase(status_code: int) -> Optional[bytes]:
    """Standard reason phrase for a status code, None for unregistered codes."""
    try:
        return http.HTTPStatus(status_code).phrase.encode()
    except ValueError:
        return None

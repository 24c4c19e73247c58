# -*- coding: utf-8 -*-
"""
    faultproxy
    ~~~~~~~~~~
    Local HTTP forwarding proxy that injects latency and scripted
    failures in front of a real upstream service.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.
"""
from typing import Dict, Optional

from .codes import httpStatusCodes, reason_phrase, NO_BODY_STATUS_CODES
from ..common.utils import build_http_response
from ..common.constants import (
    CORS_ALLOW_ORIGIN, CORS_ALLOW_METHODS, CORS_ALLOW_HEADERS,
    SERVER_HEADER_VALUE,
)


CONTINUE_RESPONSE_PKT = memoryview(
    build_http_response(
        httpStatusCodes.CONTINUE,
        reason=b'Continue',
    ),
)


def cors_headers() -> Dict[bytes, bytes]:
    """Headers which let browser based callers read any proxy response."""
    return {
        b'Access-Control-Allow-Origin': CORS_ALLOW_ORIGIN,
        b'Access-Control-Allow-Methods': CORS_ALLOW_METHODS,
        b'Access-Control-Allow-Headers': CORS_ALLOW_HEADERS,
    }


def corsResponse(
        status_code: int,
        reason: Optional[bytes] = None,
        headers: Optional[Dict[bytes, bytes]] = None,
        body: Optional[bytes] = None,
) -> memoryview:
    """Build a ``Connection: close`` response carrying the CORS headers.

    ``Content-Length`` is always declared, except for status codes
    which must not carry a body."""
    all_headers = cors_headers()
    if headers:
        all_headers.update(headers)
    if status_code in NO_BODY_STATUS_CODES:
        body = None
    elif body is None:
        body = b''
    return memoryview(
        build_http_response(
            status_code,
            reason=reason if reason is not None else reason_phrase(status_code),
            headers=all_headers,
            body=body,
            conn_close=True,
        ),
    )


def preflightResponse() -> memoryview:
    return corsResponse(httpStatusCodes.NO_CONTENT)


BAD_REQUEST_RESPONSE_PKT = corsResponse(
    httpStatusCodes.BAD_REQUEST,
    headers={
        b'Server': SERVER_HEADER_VALUE,
    },
)

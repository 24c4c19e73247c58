# -*- coding: utf-8 -*-
"""
    faultproxy
    ~~~~~~~~~~
    Local HTTP forwarding proxy that injects latency and scripted
    failures in front of a real upstream service.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.
"""
import ssl
import asyncio
import logging
from typing import Dict, Optional

from .url import Url
from .codes import NO_BODY_STATUS_CODES
from .parser import HttpParser, httpParserTypes
from .methods import httpMethods
from .exception import HttpProtocolException
from ..common.utils import text_, build_http_request
from ..common.constants import HTTPS_PROTO, DEFAULT_BUFFER_SIZE


logger = logging.getLogger(__name__)


def insecure_ssl_context() -> ssl.SSLContext:
    """TLS context which accepts any upstream certificate."""
    ctx = ssl.SSLContext(protocol=ssl.PROTOCOL_TLS_CLIENT)
    ctx.check_hostname = False
    ctx.verify_mode = ssl.CERT_NONE
    return ctx


async def client(
    upstream: Url,
    path: bytes,
    method: bytes,
    headers: Optional[Dict[bytes, bytes]] = None,
    body: Optional[bytes] = None,
    timeout: Optional[float] = None,
) -> HttpParser:
    """Async HTTP client.

    Sends a single request over a fresh connection and returns the
    complete response.  Raises on connection, TLS or protocol errors
    and on :exc:`asyncio.TimeoutError` when ``timeout`` elapses."""
    request = build_http_request(
        method=method,
        url=path,
        headers=headers,
        body=body,
    )
    if timeout is None:
        return await _dispatch(upstream, method, request)
    return await asyncio.wait_for(
        _dispatch(upstream, method, request),
        timeout=timeout,
    )


async def _dispatch(upstream: Url, method: bytes, request: bytes) -> HttpParser:
    assert upstream.hostname
    # IPv6 literals are kept bracketed within Url
    host = text_(upstream.hostname).strip('[]')
    is_https = upstream.scheme == HTTPS_PROTO
    reader, writer = await asyncio.open_connection(
        host,
        upstream.effective_port,
        ssl=insecure_ssl_context() if is_https else None,
        server_hostname=host if is_https else None,
    )
    try:
        writer.write(request)
        await writer.drain()
        return await _read_response(reader, method)
    finally:
        writer.close()


async def _read_response(reader: asyncio.StreamReader, method: bytes) -> HttpParser:
    response = HttpParser(httpParserTypes.RESPONSE_PARSER)
    bodyless = False
    while not response.is_complete:
        chunk = await reader.read(DEFAULT_BUFFER_SIZE)
        if not chunk:
            break
        response.parse(memoryview(chunk))
        # Responses which never carry a body end with their headers
        bodyless = response.headers_complete and (
            method == httpMethods.HEAD or
            int(response.code or 0) in NO_BODY_STATUS_CODES
        )
        if bodyless:
            response.body = None
            break
    if not response.headers_complete:
        raise HttpProtocolException('Upstream closed connection before sending a response')
    if response.body_expected and not response.is_complete and not bodyless:
        raise HttpProtocolException('Upstream closed connection before response completed')
    return response

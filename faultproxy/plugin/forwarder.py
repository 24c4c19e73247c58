# -*- coding: utf-8 -*-
"""
    faultproxy
    ~~~~~~~~~~
    Local HTTP forwarding proxy that injects latency and scripted
    failures in front of a real upstream service.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.
"""
import logging
from typing import Dict, Optional

from ..http.url import Url
from ..http.client import client
from ..http.plugin import HttpPipelineBasePlugin
from ..http.parser import HttpParser
from ..http.methods import BODYLESS_METHODS
from ..http.responses import corsResponse
from ..http.exception import UpstreamDispatchFailed
from ..common.flag import flags
from ..common.utils import text_, bytes_
from ..common.constants import (
    DEFAULT_UPSTREAM, DEFAULT_TIMEOUT, DEFAULT_CONTENT_TYPE,
    STRIPPED_UPSTREAM_HEADERS,
)


logger = logging.getLogger(__name__)


flags.add_argument(
    '--upstream',
    type=str,
    default=DEFAULT_UPSTREAM,
    help='Required.  Base URL of the upstream service e.g. '
    'https://api.example.com.  Inbound paths are appended verbatim.  '
    'Upstream TLS certificates are NOT verified.',
)

flags.add_argument(
    '--timeout',
    type=float,
    default=DEFAULT_TIMEOUT,
    help='Default: None.  Seconds to wait for the upstream response, '
    'by default the proxy waits forever.',
)


class ForwarderPlugin(HttpPipelineBasePlugin):
    """Relays the request to the upstream service and returns its
    response with CORS headers attached.

    Request and response bodies are buffered completely.  Any dispatch
    error surfaces as ``500 Proxy failed: <reason>``, without retry."""

    async def handle_request(self, request: HttpParser) -> Optional[memoryview]:
        assert request.method
        upstream: Url = self.flags.upstream
        path = (upstream.remainder or b'') + (request.path or b'/')
        url = '%s://%s%s' % (
            text_(upstream.scheme),
            text_(upstream.netloc),
            text_(path, errors='replace'),
        )
        logger.info('Proxying: %s %s', text_(request.method), url)
        headers = self.upstream_headers(request, upstream)
        body: Optional[bytes] = None
        if request.method not in BODYLESS_METHODS:
            body = request.body or b''
            headers[b'Content-Length'] = bytes_(len(body))
        try:
            response = await client(
                upstream,
                path,
                request.method,
                headers=headers,
                body=body,
                timeout=self.flags.timeout,
            )
        except Exception as e:
            reason = str(e) or e.__class__.__name__
            logger.error('Proxy error: %s', reason)
            raise UpstreamDispatchFailed(url, reason)
        assert response.code
        content = response.body or b''
        response_headers: Dict[bytes, bytes] = {}
        if content:
            response_headers[b'Content-Type'] = response.header(b'content-type') \
                if response.has_header(b'content-type') \
                else DEFAULT_CONTENT_TYPE
        return corsResponse(
            int(response.code),
            reason=response.reason,
            headers=response_headers,
            body=content,
        )

    @staticmethod
    def upstream_headers(request: HttpParser, upstream: Url) -> Dict[bytes, bytes]:
        """Inbound headers as sent upstream.

        ``Host`` is rewritten, ``Origin`` and ``Referer`` are dropped and
        compression as well as keep-alive are disabled."""
        headers: Dict[bytes, bytes] = {}
        for k, (key, value) in (request.headers or {}).items():
            if k in STRIPPED_UPSTREAM_HEADERS or \
                    k in (b'host', b'accept-encoding', b'connection'):
                continue
            headers[key] = value
        headers[b'Host'] = upstream.netloc
        headers[b'Accept-Encoding'] = b'identity'
        headers[b'Connection'] = b'close'
        return headers

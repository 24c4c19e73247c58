# -*- coding: utf-8 -*-
"""
    faultproxy
    ~~~~~~~~~~
    Local HTTP forwarding proxy that injects latency and scripted
    failures in front of a real upstream service.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.
"""
from typing import Optional

from ..http.methods import httpMethods
from ..http.plugin import HttpPipelineBasePlugin
from ..http.parser import HttpParser
from ..http.responses import preflightResponse


class CorsPreflightPlugin(HttpPipelineBasePlugin):
    """Answers every ``OPTIONS`` request with ``204 No Content``
    and permissive CORS headers, whatever the path."""

    async def handle_request(self, request: HttpParser) -> Optional[memoryview]:
        if request.method == httpMethods.OPTIONS:
            return preflightResponse()
        return None

# -*- coding: utf-8 -*-
"""
    faultproxy
    ~~~~~~~~~~
    Local HTTP forwarding proxy that injects latency and scripted
    failures in front of a real upstream service.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.
"""
from .base import HttpProtocolException
from .http_request_rejected import HttpRequestRejected
from .upstream_dispatch_failed import UpstreamDispatchFailed


__all__ = [
    'HttpProtocolException',
    'HttpRequestRejected',
    'UpstreamDispatchFailed',
]

# -*- coding: utf-8 -*-
"""
    faultproxy
    ~~~~~~~~~~
    Local HTTP forwarding proxy that injects latency and scripted
    failures in front of a real upstream service.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.
"""
from typing import Any, Dict, Optional

from faultproxy.fault import FailureLedger
from faultproxy.http.parser import HttpParser
from faultproxy.common.flag import FlagParser
from faultproxy.common.utils import bytes_, build_http_request


def make_flags(**opts: Any) -> Any:
    opts.setdefault('upstream', 'https://api.example.com')
    return FlagParser.initialize([], **opts)


def make_plugin(klass: Any, ledger: Optional[FailureLedger] = None, **opts: Any) -> Any:
    return klass(make_flags(**opts), ledger if ledger is not None else FailureLedger())


def make_request(
        method: bytes,
        path: bytes,
        headers: Optional[Dict[bytes, bytes]] = None,
        body: Optional[bytes] = None,
) -> HttpParser:
    headers = dict(headers or {})
    headers.setdefault(b'Host', b'localhost:9000')
    if body is not None:
        headers[b'Content-Length'] = bytes_(len(body))
    return HttpParser.request(build_http_request(method, path, headers=headers, body=body))

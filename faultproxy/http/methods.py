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
from typing import NamedTuple


HttpMethods = NamedTuple(
    'HttpMethods', [
        ('DELETE', bytes),
        ('GET', bytes),
        ('HEAD', bytes),
        ('OPTIONS', bytes),
        ('PATCH', bytes),
        ('POST', bytes),
        ('PUT', bytes),
    ],
)

httpMethods = HttpMethods(
    b'DELETE',
    b'GET',
    b'HEAD',
    b'OPTIONS',
    b'PATCH',
    b'POST',
    b'PUT',
)

# Requests forwarded upstream without a body
BODYLESS_METHODS = (httpMethods.GET, httpMethods.HEAD)

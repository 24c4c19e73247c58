# -*- coding: utf-8 -*-
"""
    faultproxy
    ~~~~~~~~~~
    Local HTTP forwarding proxy that injects latency and scripted
    failures in front of a real upstream service.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.
"""
from .url import Url
from .codes import httpStatusCodes
from .methods import httpMethods


__all__ = [
    'Url',
    'httpStatusCodes',
    'httpMethods',
]

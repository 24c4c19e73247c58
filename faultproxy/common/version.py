# -*- coding: utf-8 -*-
"""
    faultproxy
    ~~~~~~~~~~
    Local HTTP forwarding proxy that injects latency and scripted
    failures in front of a real upstream service.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.
"""
from typing import Tuple


__version__ = '0.1.0'

VERSION: Tuple[int, ...] = tuple(int(part) for part in __version__.split('.'))


__all__ = '__version__', 'VERSION'

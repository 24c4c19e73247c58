# -*- coding: utf-8 -*-
"""
    faultproxy
    ~~~~~~~~~~
    Local HTTP forwarding proxy that injects latency and scripted
    failures in front of a real upstream service.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.
"""
from .proxy import FaultProxy, main, sleep_loop, entry_point
from .testing import TestCase


__all__ = [
    # FaultProxy context manager
    'FaultProxy',
    # Base class for integration tests which need a running proxy
    'TestCase',
    # Entry point
    'main',
    # Blocks until KeyboardInterrupt
    'sleep_loop',
    # Console script
    'entry_point',
]

# -*- coding: utf-8 -*-
"""
    faultproxy
    ~~~~~~~~~~
    Local HTTP forwarding proxy that injects latency and scripted
    failures in front of a real upstream service.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.
"""
from .cors_preflight import CorsPreflightPlugin
from .delay_injector import DelayInjectorPlugin
from .failure_injector import FailureInjectorPlugin
from .forwarder import ForwarderPlugin


__all__ = [
    'CorsPreflightPlugin',
    'DelayInjectorPlugin',
    'FailureInjectorPlugin',
    'ForwarderPlugin',
]

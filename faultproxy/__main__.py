# -*- coding: utf-8 -*-
"""
    faultproxy
    ~~~~~~~~~~
    Local HTTP forwarding proxy that injects latency and scripted
    failures in front of a real upstream service.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.
"""
from .proxy import entry_point


if __name__ == '__main__':
    entry_point()

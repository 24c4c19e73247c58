# -*- coding: utf-8 -*-
"""
    faultproxy
    ~~~~~~~~~~
    Local HTTP forwarding proxy that injects latency and scripted
    failures in front of a real upstream service.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.
"""


class ConfigurationError(ValueError):
    """Raised while flags are initialized when the proxy configuration
    or one of its rule tables is invalid.

    Configuration errors are fatal, the proxy never starts serving
    requests with an invalid rule."""

# -*- coding: utf-8 -*-
"""
    faultproxy
    ~~~~~~~~~~
    Local HTTP forwarding proxy that injects latency and scripted
    failures in front of a real upstream service.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.
"""
import platform
import ipaddress
from typing import List, Optional

from .version import __version__


IS_WINDOWS = platform.system() == 'Windows'

CRLF = b'\r\n'
COLON = b':'
WHITESPACE = b' '
SLASH = b'/'
ASTERISK = b'*'
HTTP_PROTO = b'http'
HTTPS_PROTO = HTTP_PROTO + b's'
HTTP_1_1 = HTTP_PROTO.upper() + SLASH + b'1.1'

SERVER_HEADER_VALUE = b'faultproxy v' + __version__.encode('utf-8', 'strict')

# CORS headers attached to every response the proxy produces
CORS_ALLOW_ORIGIN = b'*'
CORS_ALLOW_METHODS = b'GET, POST, PUT, PATCH, DELETE, OPTIONS'
CORS_ALLOW_HEADERS = b'*'

# Failure budget which never runs out
UNLIMITED_FAILURES = -1

# Upstream headers removed before dispatch
STRIPPED_UPSTREAM_HEADERS: List[bytes] = [
    b'origin',
    b'referer',
    b'expect',
    b'transfer-encoding',
    b'content-length',
]
DEFAULT_CONTENT_TYPE = b'application/octet-stream'
PROXY_FAILED_PREFIX = b'Proxy failed: '

# Defaults
DEFAULT_BACKLOG = 100
DEFAULT_BUFFER_SIZE = 128 * 1024
DEFAULT_ALLOWED_URL_SCHEMES = [HTTP_PROTO, HTTPS_PROTO]
DEFAULT_HTTP_PORT = 80
DEFAULT_HTTPS_PORT = 443
DEFAULT_IPV4_HOSTNAME = ipaddress.IPv4Address('127.0.0.1')
DEFAULT_PORT = 9000
DEFAULT_UPSTREAM: Optional[str] = None
DEFAULT_TIMEOUT: Optional[float] = None
DEFAULT_RULES_FILE = None
DEFAULT_VERSION = False
DEFAULT_LOG_FILE = None
DEFAULT_LOG_FORMAT = '%(asctime)s - pid:%(process)d [%(levelname)-.1s] %(module)s.%(funcName)s:%(lineno)d - %(message)s'
DEFAULT_LOG_LEVEL = 'INFO'
DEFAULT_ACCESS_LOG_FORMAT = '{client_ip}:{client_port} - ' + \
    '{request_method} {request_path} -> {handled_by} - ' + \
    '{response_code} - ' + \
    '{connection_time_ms}ms'

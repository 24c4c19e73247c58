# -*- coding: utf-8 -*-
"""
    faultproxy
    ~~~~~~~~~~
    Local HTTP forwarding proxy that injects latency and scripted
    failures in front of a real upstream service.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.
"""
import socket
import unittest

from faultproxy.common.utils import (
    text_, bytes_, build_http_request, build_http_response, find_http_line,
    get_available_port,
)
from faultproxy.common.constants import CRLF


class TestUtils(unittest.TestCase):

    def test_text_and_bytes(self) -> None:
        self.assertEqual(text_(b'hello'), 'hello')
        self.assertEqual(text_(404), '404')
        self.assertEqual(text_('as-is'), 'as-is')
        self.assertEqual(bytes_('hello'), b'hello')
        self.assertEqual(bytes_(8080), b'8080')
        self.assertEqual(bytes_(b'as-is'), b'as-is')

    def test_build_http_request(self) -> None:
        self.assertEqual(
            build_http_request(
                b'POST', b'/api/login',
                headers={b'Host': b'example.com'},
                body=b'{}',
            ),
            CRLF.join([
                b'POST /api/login HTTP/1.1',
                b'Host: example.com',
                CRLF,
            ]) + b'{}',
        )

    def test_build_http_response_declares_length(self) -> None:
        self.assertEqual(
            build_http_response(200, reason=b'OK', body=b'hello'),
            CRLF.join([
                b'HTTP/1.1 200 OK',
                b'Content-Length: 5',
                CRLF,
            ]) + b'hello',
        )

    def test_build_http_response_empty_body(self) -> None:
        self.assertEqual(
            build_http_response(400, reason=b'Bad Request', body=b''),
            CRLF.join([
                b'HTTP/1.1 400 Bad Request',
                b'Content-Length: 0',
                CRLF,
            ]),
        )

    def test_build_http_response_without_body(self) -> None:
        self.assertEqual(
            build_http_response(204, reason=b'No Content', conn_close=True),
            CRLF.join([
                b'HTTP/1.1 204 No Content',
                b'Connection: close',
                CRLF,
            ]),
        )

    def test_build_http_response_keeps_explicit_length(self) -> None:
        pkt = build_http_response(
            200, headers={b'content-length': b'3'}, body=b'abc',
        )
        self.assertEqual(pkt.count(b'ength:'), 1)

    def test_build_http_response_does_not_mutate_headers(self) -> None:
        headers = {b'X-Key': b'value'}
        build_http_response(200, headers=headers, body=b'x', conn_close=True)
        self.assertEqual(headers, {b'X-Key': b'value'})

    def test_find_http_line(self) -> None:
        self.assertEqual(
            find_http_line(b'GET / HTTP/1.1\r\nHost: a\r\n'),
            (b'GET / HTTP/1.1', b'Host: a\r\n'),
        )
        self.assertEqual(find_http_line(b'partial'), (None, b'partial'))

    def test_get_available_port(self) -> None:
        port = get_available_port()
        self.assertGreater(port, 0)
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            sock.bind(('127.0.0.1', port))

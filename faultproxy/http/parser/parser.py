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
"""
from typing import Dict, List, Type, Tuple, TypeVar, Optional

from ..url import Url
from .chunk import ChunkParser, chunkParserStates
from .types import httpParserTypes, httpParserStates
from ..exception import HttpProtocolException
from ...common.utils import text_
from ...common.constants import CRLF, COLON, WHITESPACE


T = TypeVar('T', bound='HttpParser')


class HttpParser:
    """HTTP request/response parser.

    Bodies are buffered entirely, the proxy never streams a body
    through before it has been completely received.
    """

    def __init__(self, parser_type: int) -> None:
        self.state: int = httpParserStates.INITIALIZED
        self.type: int = parser_type
        # Request attributes
        self.path: Optional[bytes] = None
        self.method: Optional[bytes] = None
        # Response attributes
        self.code: Optional[bytes] = None
        self.reason: Optional[bytes] = None
        self.version: Optional[bytes] = None
        # Total size of raw bytes passed for parsing
        self.total_size: int = 0
        # Buffer to hold unprocessed bytes
        self.buffer: Optional[bytes] = None
        # Internal headers data structure:
        # - Keys are lower case header names.
        # - Values are 2-tuple containing original
        #   header and it's value as received.
        self.headers: Optional[Dict[bytes, Tuple[bytes, bytes]]] = None
        self.body: Optional[bytes] = None
        self.chunk: Optional[ChunkParser] = None
        # Internal request line as a url structure
        self._url: Optional[Url] = None
        # Deduced states from the packet
        self._is_chunked_encoded: bool = False
        self._content_expected: bool = False

    @classmethod
    def request(cls: Type[T], raw: bytes) -> T:
        parser = cls(httpParserTypes.REQUEST_PARSER)
        parser.parse(memoryview(raw))
        return parser

    @classmethod
    def response(cls: Type[T], raw: bytes) -> T:
        parser = cls(httpParserTypes.RESPONSE_PARSER)
        parser.parse(memoryview(raw))
        return parser

    def header(self, key: bytes) -> bytes:
        """Convenient method to return original header value from internal data structure."""
        if self.headers is None or key.lower() not in self.headers:
            raise KeyError('%s not found in headers' % text_(key))
        return self.headers[key.lower()][1]

    def has_header(self, key: bytes) -> bool:
        """Returns true if header key was found in payload."""
        if self.headers is None:
            return False
        return key.lower() in self.headers

    def add_header(self, key: bytes, value: bytes) -> bytes:
        """Add/Update a header to internal data structure.

        Returns key with which passed (key, value) tuple is available."""
        if self.headers is None:
            self.headers = {}
        k = key.lower()
        self.headers[k] = (key, value)
        return k

    def add_headers(self, headers: List[Tuple[bytes, bytes]]) -> None:
        """Add/Update multiple headers to internal data structure"""
        for (key, value) in headers:
            self.add_header(key, value)

    def del_header(self, header: bytes) -> None:
        """Delete a header from internal data structure."""
        if self.headers and header.lower() in self.headers:
            del self.headers[header.lower()]

    def del_headers(self, headers: List[bytes]) -> None:
        """Delete headers from internal data structure."""
        for key in headers:
            self.del_header(key.lower())

    def set_url(self, url: bytes) -> None:
        """Given a request line target, parses it and sets path."""
        self._url = Url.from_bytes(url)
        # Absolute-form targets are reduced to their path
        self.path = self._url.remainder or b'/'

    @property
    def is_complete(self) -> bool:
        return self.state == httpParserStates.COMPLETE

    @property
    def headers_complete(self) -> bool:
        """Returns true once the blank line after headers has been received."""
        return self.state >= httpParserStates.HEADERS_COMPLETE

    @property
    def is_chunked_encoded(self) -> bool:
        """Returns true if transfer-encoding chunked is used."""
        return self._is_chunked_encoded

    @property
    def content_expected(self) -> bool:
        """Returns true if content-length is present and not 0."""
        return self._content_expected

    @property
    def body_expected(self) -> bool:
        """Returns true if content or chunked response is expected."""
        return self._content_expected or self._is_chunked_encoded

    @property
    def expects_continue(self) -> bool:
        """Returns true when client waits for ``100 Continue`` before sending body."""
        return self.has_header(b'expect') and \
            self.header(b'expect').lower() == b'100-continue'

    def parse(self, raw: memoryview) -> None:
        """Parses HTTP request or response out of raw bytes.

        Check for `HttpParser.state` after `parse` has successfully returned."""
        size = len(raw)
        self.total_size += size
        data = raw.tobytes()
        if self.buffer:
            data = self.buffer + data
        self.buffer, more = None, size > 0
        while more and self.state != httpParserStates.COMPLETE:
            # gte with HEADERS_COMPLETE also encapsulated RCVING_BODY state
            if self.state >= httpParserStates.HEADERS_COMPLETE:
                more, data = self._process_body(data)
            elif self.state == httpParserStates.INITIALIZED:
                more, data = self._process_line(data)
            else:
                more, data = self._process_headers(data)
            # Mark packet as complete if headers received and no incoming
            # body indication received.  Responses without any length
            # indication are delimited by connection close instead.
            if self.state == httpParserStates.HEADERS_COMPLETE and \
                    not self.body_expected and \
                    (
                        self.type == httpParserTypes.REQUEST_PARSER or
                        self.has_header(b'content-length')
                    ):
                self.state = httpParserStates.COMPLETE
        self.buffer = None if data == b'' else data

    def _process_body(self, raw: bytes) -> Tuple[bool, bytes]:
        # Ref: http://www.ietf.org/rfc/rfc2616.txt
        # Transfer-encoding takes preference over content-length.
        if self._is_chunked_encoded:
            if not self.chunk:
                self.chunk = ChunkParser()
            raw = self.chunk.parse(raw)
            if self.chunk.state == chunkParserStates.COMPLETE:
                self.body = self.chunk.body
                self.state = httpParserStates.COMPLETE
            return False, raw
        if self._content_expected:
            self.state = httpParserStates.RCVING_BODY
            if self.body is None:
                self.body = b''
            total_size = int(self.header(b'content-length'))
            received_size = len(self.body)
            self.body += raw[:total_size - received_size]
            if len(self.body) == total_size:
                self.state = httpParserStates.COMPLETE
            return False, raw[total_size - received_size:]
        # Response without content-length and transfer-encoding,
        # everything till connection close belongs to the body.
        self.state = httpParserStates.RCVING_BODY
        self.body = (self.body or b'') + raw
        return False, b''

    def _process_headers(self, raw: bytes) -> Tuple[bool, bytes]:
        """Returns False when no CRLF could be found in received bytes."""
        while True:
            parts = raw.split(CRLF, 1)
            if len(parts) == 1:
                return False, raw
            line, raw = parts[0], parts[1]
            if self.state in (httpParserStates.LINE_RCVD, httpParserStates.RCVING_HEADERS):
                if line.strip() == b'':  # Blank line received.
                    self.state = httpParserStates.HEADERS_COMPLETE
                else:
                    self.state = httpParserStates.RCVING_HEADERS
                    self._process_header(line)
            if raw == b'' or self.state == httpParserStates.HEADERS_COMPLETE:
                break
        return len(raw) > 0 or self.state == httpParserStates.HEADERS_COMPLETE, raw

    def _process_line(self, raw: bytes) -> Tuple[bool, bytes]:
        parts = raw.split(CRLF, 1)
        if len(parts) == 1:
            return False, raw
        line, raw = parts[0], parts[1]
        if self.type == httpParserTypes.REQUEST_PARSER:
            # Ref: https://datatracker.ietf.org/doc/html/rfc2616#section-5.1
            parts = line.split(WHITESPACE, 2)
            if len(parts) != 3 or not parts[0] or not parts[1]:
                # To avoid a possible attack vector, we raise exception
                # if parser receives an invalid request line.
                raise HttpProtocolException('Invalid request line %r' % line)
            self.method = parts[0].upper()
            self.set_url(parts[1])
            self.version = parts[2]
        else:
            parts = line.split(WHITESPACE, 2)
            if len(parts) < 2 or not parts[1].isdigit():
                raise HttpProtocolException('Invalid status line %r' % line)
            self.version = parts[0]
            self.code = parts[1]
            if len(parts) == 3:
                self.reason = parts[2]
        self.state = httpParserStates.LINE_RCVD
        return len(raw) > 0, raw

    def _process_header(self, raw: bytes) -> None:
        parts = raw.split(COLON, 1)
        key, value = (
            parts[0].strip(),
            b'' if len(parts) == 1 else parts[1].strip(),
        )
        k = self.add_header(key, value)
        if k == b'content-length':
            try:
                length = int(value)
            except ValueError:
                raise HttpProtocolException('Invalid content-length %r' % value)
            self._content_expected = length > 0
        elif k == b'transfer-encoding' and value.lower() == b'chunked':
            self._is_chunked_encoded = True

    @staticmethod
    def status_code(raw: memoryview) -> int:
        """Status code of a built response packet."""
        return int(bytes(raw).split(WHITESPACE, 2)[1])

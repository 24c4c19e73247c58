# -*- coding: utf-8 -*-
"""
    faultproxy
    ~~~~~~~~~~
    Local HTTP forwarding proxy that injects latency and scripted
    failures in front of a real upstream service.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.
"""
import asyncio
from typing import List, Optional

from faultproxy.http import Url
from faultproxy.http.parser import HttpParser, httpParserTypes


class Upstream:
    """Local asyncio server which answers every request with a canned
    packet and records received requests."""

    def __init__(self, response: Optional[bytes]) -> None:
        self.response = response
        self.requests: List[HttpParser] = []
        self.server: Optional[asyncio.AbstractServer] = None

    async def start(self) -> Url:
        self.server = await asyncio.start_server(self.handle, '127.0.0.1', 0)
        port = self.server.sockets[0].getsockname()[1]
        return Url(scheme=b'http', hostname=b'127.0.0.1', port=port)

    async def stop(self) -> None:
        assert self.server
        self.server.close()
        await self.server.wait_closed()

    async def handle(
            self,
            reader: asyncio.StreamReader,
            writer: asyncio.StreamWriter,
    ) -> None:
        request = HttpParser(httpParserTypes.REQUEST_PARSER)
        while not request.is_complete:
            data = await reader.read(1024)
            if not data:
                break
            request.parse(memoryview(data))
        self.requests.append(request)
        if self.response is None:
            # Never respond, wait for client to go away
            await reader.read()
        else:
            writer.write(self.response)
            await writer.drain()
        writer.close()

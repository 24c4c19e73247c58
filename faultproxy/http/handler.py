# -*- coding: utf-8 -*-
"""
    faultproxy
    ~~~~~~~~~~
    Local HTTP forwarding proxy that injects latency and scripted
    failures in front of a real upstream service.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.
"""
import time
import asyncio
import logging
import argparse
from typing import Any, Dict, Optional

from .parser import HttpParser, httpParserTypes
from .pipeline import Pipeline, PipelineResult
from .responses import CONTINUE_RESPONSE_PKT, BAD_REQUEST_RESPONSE_PKT
from .exception import HttpProtocolException
from ..common.utils import text_
from ..common.constants import DEFAULT_BUFFER_SIZE, DEFAULT_ACCESS_LOG_FORMAT


logger = logging.getLogger(__name__)


class HttpProtocolHandler:
    """Serves inbound client connections.

    One request per connection.  The request is buffered completely,
    driven through the pipeline and the connection is closed right
    after the response has been flushed.
    """

    def __init__(self, flags: argparse.Namespace, pipeline: Pipeline) -> None:
        self.flags = flags
        self.pipeline = pipeline

    async def handle(
            self,
            reader: asyncio.StreamReader,
            writer: asyncio.StreamWriter,
    ) -> None:
        start_time = time.time()
        addr = writer.get_extra_info('peername')
        request = HttpParser(httpParserTypes.REQUEST_PARSER)
        result: Optional[PipelineResult] = None
        try:
            if not await self.read_request(reader, writer, request):
                logger.debug('Client closed connection before sending a complete request')
                return
            result = await self.pipeline.run(request)
            if result.response is not None:
                writer.write(result.response)
                await writer.drain()
        except (HttpProtocolException, ValueError) as e:
            logger.warning('HttpProtocolException: %s', e)
            writer.write(BAD_REQUEST_RESPONSE_PKT)
            await writer.drain()
        except ConnectionError as e:
            # Client went away while we were responding
            logger.debug('%r', e)
        except Exception as e:
            logger.exception('Exception while handling connection %r', addr, exc_info=e)
        finally:
            writer.close()
            if result is not None:
                self.access_log(addr, request, result, start_time)

    async def read_request(
            self,
            reader: asyncio.StreamReader,
            writer: asyncio.StreamWriter,
            request: HttpParser,
    ) -> bool:
        """Reads until request is complete.  Returns False if client
        closed the connection before that."""
        continued = False
        while not request.is_complete:
            data = await reader.read(DEFAULT_BUFFER_SIZE)
            if not data:
                return False
            request.parse(memoryview(data))
            if request.headers_complete and \
                    not request.is_complete and \
                    request.expects_continue and \
                    not continued:
                writer.write(CONTINUE_RESPONSE_PKT)
                await writer.drain()
                continued = True
        return True

    def access_log(
            self,
            addr: Any,
            request: HttpParser,
            result: PipelineResult,
            start_time: float,
    ) -> None:
        context: Dict[str, Any] = {
            'client_ip': None if not addr else addr[0],
            'client_port': None if not addr else addr[1],
            'connection_time_ms': '%.2f' % ((time.time() - start_time) * 1000),
            # Request
            'request_method': text_(request.method),
            'request_path': text_(request.path),
            'request_bytes': request.total_size,
            # Response
            'handled_by': result.handled_by,
            'response_code': '-' if result.response is None
            else HttpParser.status_code(result.response),
        }
        logger.info(DEFAULT_ACCESS_LOG_FORMAT.format_map(context))

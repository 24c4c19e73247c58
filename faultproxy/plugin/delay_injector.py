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
import logging
from typing import Optional

from ..http.plugin import HttpPipelineBasePlugin
from ..http.parser import HttpParser
from ..common.flag import flags
from ..common.utils import text_


logger = logging.getLogger(__name__)


flags.add_argument(
    '--delay',
    action='append',
    type=str,
    default=None,
    metavar='PREFIX=MS',
    help='Default: None.  Delay requests whose path starts with PREFIX '
    'by MS milliseconds.  Repeat the flag for more endpoints, '
    'first matching prefix wins.',
)


class DelayInjectorPlugin(HttpPipelineBasePlugin):
    """Adds latency to requests matching a delay rule.

    Only the matching request is suspended, the event loop keeps
    serving other connections meanwhile.  Never responds by itself."""

    async def handle_request(self, request: HttpParser) -> Optional[memoryview]:
        rule = self.flags.delays.match(request.path)
        if rule is not None:
            logger.info('Delaying %s by %dms', text_(rule.pattern), rule.delay_ms)
            await asyncio.sleep(rule.delay_ms / 1000)
        return None

# -*- coding: utf-8 -*-
"""
    faultproxy
    ~~~~~~~~~~
    Local HTTP forwarding proxy that injects latency and scripted
    failures in front of a real upstream service.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.
"""
import logging
from typing import Optional

from ..http.plugin import HttpPipelineBasePlugin
from ..http.parser import HttpParser
from ..http.exception import HttpRequestRejected
from ..common.flag import flags
from ..common.utils import text_
from ..common.constants import UNLIMITED_FAILURES


logger = logging.getLogger(__name__)


flags.add_argument(
    '--fail',
    action='append',
    type=str,
    default=None,
    metavar='PREFIX=TIMES:STATUS',
    help='Default: None.  Respond with STATUS to the first TIMES requests '
    'whose path starts with PREFIX, later requests are forwarded.  '
    'Use TIMES=-1 to fail forever.  Repeat the flag for more endpoints.',
)


class FailureInjectorPlugin(HttpPipelineBasePlugin):
    """Rejects requests matching a failure rule until its budget is exhausted.

    Rejected requests receive the configured status, CORS headers and
    an empty body.  Once ``times`` failures have been issued for a pattern,
    matching requests continue to the forwarder."""

    async def handle_request(self, request: HttpParser) -> Optional[memoryview]:
        rule = self.flags.failures.match(request.path)
        if rule is None:
            return None
        count = self.ledger.try_increment(rule.pattern, rule.times)
        if count is None:
            return None
        logger.info(
            'Failing %s (%d/%s) with %d',
            text_(rule.pattern),
            count,
            '∞' if rule.times == UNLIMITED_FAILURES else rule.times,
            rule.status_code,
        )
        raise HttpRequestRejected(status_code=rule.status_code, body=b'')

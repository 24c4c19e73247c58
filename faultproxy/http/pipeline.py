# -*- coding: utf-8 -*-
"""
    faultproxy
    ~~~~~~~~~~
    Local HTTP forwarding proxy that injects latency and scripted
    failures in front of a real upstream service.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.
"""
import argparse
import logging
from typing import List, Type, Optional, Sequence, NamedTuple

from .codes import httpStatusCodes
from .plugin import HttpPipelineBasePlugin
from .parser import HttpParser
from .responses import corsResponse
from .exception import HttpProtocolException
from ..fault import FailureLedger
from ..plugin import (
    CorsPreflightPlugin, DelayInjectorPlugin, FailureInjectorPlugin,
    ForwarderPlugin,
)


logger = logging.getLogger(__name__)


PipelineResult = NamedTuple(
    'PipelineResult', [
        ('handled_by', str),
        ('response', Optional[memoryview]),
    ],
)

DEFAULT_PIPELINE_PLUGINS: Sequence[Type[HttpPipelineBasePlugin]] = (
    CorsPreflightPlugin,
    DelayInjectorPlugin,
    FailureInjectorPlugin,
    ForwarderPlugin,
)


class Pipeline:
    """Drives a request through an ordered list of stages.

    The first stage returning a response wins.  Every request ends in
    exactly one outcome: a response, or None when the connection must
    simply be closed.
    """

    def __init__(
            self,
            flags: argparse.Namespace,
            ledger: Optional[FailureLedger] = None,
            klasses: Optional[Sequence[Type[HttpPipelineBasePlugin]]] = None,
    ) -> None:
        self.flags = flags
        self.ledger = ledger if ledger is not None else FailureLedger()
        self.plugins: List[HttpPipelineBasePlugin] = [
            klass(flags, self.ledger)
            for klass in (klasses if klasses is not None else DEFAULT_PIPELINE_PLUGINS)
        ]

    async def run(self, request: HttpParser) -> PipelineResult:
        for plugin in self.plugins:
            try:
                response = await plugin.handle_request(request)
            except HttpProtocolException as e:
                logger.debug('%s terminated request: %s', plugin.name(), e)
                return PipelineResult(plugin.name(), e.response(request))
            if response is not None:
                return PipelineResult(plugin.name(), response)
        # None of the stages produced a response
        return PipelineResult(
            self.__class__.__name__,
            corsResponse(httpStatusCodes.NOT_FOUND),
        )
